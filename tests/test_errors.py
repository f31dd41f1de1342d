# tests/test_errors.py
import io
import logging
from contextlib import contextmanager

import pytest

from spicelib_core import (
    ConfigValidationError, DiagnosableError, LibraryConfig, ParsingError, SpiceLibError,
    UnparsableLineError, ValueParseError, parse_netlist,
)
from spicelib_core.errors import Diagnosable, format_diagnostic_report
from spicelib_core.log_config import PACKAGE_LOGGER_NAME, setup_logging


class TestDiagnosticReports:

    def test_report_layout(self):
        report = format_diagnostic_report(
            error_type="Unparsable Netlist Line",
            details="First line.\nSecond line.",
            suggestion="Fix it.",
            context={"source_file": "amp.cir", "line_number": 12, "user_input": "R1 a"},
        )

        assert "SpiceLib Core: Actionable Diagnostic Report" in report
        assert "Error Type:     Unparsable Netlist Line" in report
        assert "Source File:    amp.cir" in report
        assert "Line Number:    12" in report
        assert "User Input:     'R1 a'" in report
        assert "  First line.\n  Second line." in report
        assert "Suggestion:\n  Fix it." in report

    def test_missing_context_entries_are_omitted(self):
        report = format_diagnostic_report("Invalid Numeric Value", "Bad.", "", {"line_number": None})

        assert "Line Number" not in report
        assert "Source File" not in report
        assert "Suggestion" not in report

    @pytest.mark.parametrize("error", [
        ValueParseError(token="4.7x"),
        UnparsableLineError(line="Q1 c b Q2N2222", line_number=3),
        ParsingError(details="SPICE file not found at path: /x.cir", file_path="/x.cir"),
    ])
    def test_parser_errors_are_diagnosable(self, error):
        assert isinstance(error, SpiceLibError)
        assert isinstance(error, DiagnosableError)
        assert isinstance(error, Diagnosable)
        assert error.get_diagnostic_report().strip()
        assert str(error)

    def test_errors_are_catchable_by_base_class(self):
        with pytest.raises(SpiceLibError):
            raise ValueParseError(token="abc")

    def test_errors_pass_through_context_managers_unchanged(self):
        @contextmanager
        def timed():
            yield

        with pytest.raises(UnparsableLineError) as excinfo:
            with timed():
                parse_netlist("R1 a b 1k\nHello world\n")
        assert excinfo.value.line_number == 2

        with pytest.raises(ValueParseError):
            with timed():
                parse_netlist("Title\nR1 a b 1kk\n")

        with pytest.raises(ConfigValidationError):
            with timed():
                LibraryConfig.from_mapping({"library_paths": [], "max_workers": 0})


class TestLogging:

    def test_setup_logging_replaces_its_own_handler(self):
        logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        foreign = logging.NullHandler()
        logger.addHandler(foreign)
        try:
            stream = io.StringIO()
            setup_logging(logging.DEBUG, stream=stream)
            setup_logging(logging.DEBUG, stream=stream)

            own = [h for h in logger.handlers if getattr(h, "_spicelib_console", False)]
            assert len(own) == 1
            assert foreign in logger.handlers

            logging.getLogger("spicelib_core.parser.netlist").debug("hello from the parser")
            assert "[spicelib_core.parser.netlist] hello from the parser" in stream.getvalue()
        finally:
            logger.removeHandler(foreign)
            setup_logging()

    def test_root_logger_is_left_alone(self):
        root_handlers = list(logging.getLogger().handlers)
        setup_logging()
        assert logging.getLogger().handlers == root_handlers
