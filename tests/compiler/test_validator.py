import unittest

from widgetforge.compiler.request import WidgetRequest
from widgetforge.compiler.validator import validate_request
from widgetforge.core.errors import ValidationError


def _request(**overrides) -> WidgetRequest:
    fields = {
        "command": "whoami",
        "refresh_interval_ms": 1000,
        "positioning": "position: absolute; top: 10px; left: 10px;",
        "markup": "<div>{data}</div>",
        "style_variables_raw": "{}",
    }
    fields.update(overrides)
    return WidgetRequest(**fields)


class TestValidateRequest(unittest.TestCase):
    def test_valid_request_is_returned_unchanged(self) -> None:
        req = _request()
        self.assertIs(validate_request(req), req)

    def test_empty_command(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_request(_request(command=""))
        self.assertEqual(ctx.exception.code, "validation.empty_command")

    def test_non_positive_refresh_interval(self) -> None:
        for value in (0, -1, -5000):
            with self.assertRaises(ValidationError) as ctx:
                validate_request(_request(refresh_interval_ms=value))
            self.assertEqual(ctx.exception.code, "validation.invalid_refresh_frequency")

    def test_empty_markup(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_request(_request(markup=""))
        self.assertEqual(ctx.exception.code, "validation.empty_markup")

    def test_empty_positioning(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_request(_request(positioning=""))
        self.assertEqual(ctx.exception.code, "validation.empty_positioning")

    def test_only_first_broken_field_is_reported(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_request(_request(command="", refresh_interval_ms=0, markup="", positioning=""))
        self.assertEqual(ctx.exception.code, "validation.empty_command")

        with self.assertRaises(ValidationError) as ctx:
            validate_request(_request(refresh_interval_ms=0, markup="", positioning=""))
        self.assertEqual(ctx.exception.code, "validation.invalid_refresh_frequency")

        with self.assertRaises(ValidationError) as ctx:
            validate_request(_request(markup="", positioning=""))
        self.assertEqual(ctx.exception.code, "validation.empty_markup")

    def test_empty_style_dictionary_is_not_a_validation_error(self) -> None:
        req = _request(style_variables_raw="")
        self.assertIs(validate_request(req), req)

    def test_from_args_uses_wire_names(self) -> None:
        req = WidgetRequest.from_args(
            {
                "command": "date",
                "refreshIntervalMs": 500,
                "positioning": "position: fixed;",
                "markup": "<span>{data}</span>",
                "styleVariablesRaw": '{"aStyle": "color: red;"}',
            }
        )
        self.assertEqual(req.command, "date")
        self.assertEqual(req.refresh_interval_ms, 500)
        self.assertEqual(req.style_variables_raw, '{"aStyle": "color: red;"}')


if __name__ == "__main__":
    unittest.main()
