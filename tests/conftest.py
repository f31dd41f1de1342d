# tests/conftest.py
import pytest

from spicelib_core.parser import LibraryParser, NetlistParser

SPEAKER_LIBRARY = """\
* Speaker driver models
* MANUFACTURER: Acme Corp
* PART_NUMBER: 275-030
* PRODUCT_NAME: Acme 1" Silk Dome Tweeter
* TYPE: tweeter
* FS: 1450 Hz
* QTS: 0.45
* RE: 5.6
* SENSITIVITY: 88.5 dB
* Not a key value line
.SUBCKT TWEETER_275_030 plus minus
Re plus 1 5.6
Le 1 2 0.05mH
* internal comment that is discarded
Rms 2 minus 4.2 * inline note
.ENDS TWEETER_275_030

* MANUFACTURER: Bassline Audio
* TYPE: woofer
* FS: 28.1
* VAS: 62.4 L
* XMAX: 9
.SUBCKT WOOFER_10 plus minus
Re plus 1 6.1
Le 1 minus 1.2mH
.ENDS
"""

DEVICE_LIBRARY = """\
* General purpose devices
.MODEL D1N4148 D(IS=2.52n RS=0.568 N=1.752 CJO=4p M=0.4 TT=20n BV=100)
.MODEL Q2N2222 NPN(IS=14.34f BF=255.9 VAF=74.03
+ IKF=0.2847 ISE=14.34f
+ CJC=7.306p)
.MODEL Q2N3906 PNP(IS=1.41f BF=180.7)
.MODEL BSS84 PMOS(VTO=-1.6 KP=0.1)
.MODEL J2N3819 NJF(BETA=1.304m VTO=-3)
"""


@pytest.fixture
def netlist_parser():
    return NetlistParser()


@pytest.fixture
def library_parser():
    return LibraryParser()


@pytest.fixture
def speaker_library_text():
    return SPEAKER_LIBRARY


@pytest.fixture
def device_library_text():
    return DEVICE_LIBRARY
