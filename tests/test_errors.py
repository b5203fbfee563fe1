"""Tests for the Result types and the error code taxonomy."""
import pytest

from core.errors import AppError, Err, ErrorCode, Ok, from_exception, try_result, validation_error


class TestResult:
    def test_ok_map_and_unwrap_or(self):
        assert Ok(2).map(lambda v: v * 3) == Ok(6)
        assert Ok(2).unwrap_or(0) == 2

    def test_err_map_and_unwrap_or(self):
        err = validation_error("bad")
        assert err.map(lambda v: v * 3) is err
        assert err.unwrap_or(0) == 0

    def test_and_then_chains_only_on_ok(self):
        assert Ok("7").and_then(lambda v: Ok(int(v))) == Ok(7)
        err = validation_error("bad")
        assert err.and_then(lambda v: Ok(v)) is err

    def test_unwrap_on_wrong_variant_raises(self):
        with pytest.raises(ValueError):
            Ok(1).unwrap_err()
        with pytest.raises(ValueError):
            validation_error("bad").unwrap()

    def test_try_result_wraps_exceptions(self):
        result = try_result(lambda: int("x"), code=ErrorCode.E2021_INVALID_JSON, origin="cli")
        assert isinstance(result, Err)
        error = result.unwrap_err()
        assert error.code is ErrorCode.E2021_INVALID_JSON
        assert error.context.origin == "cli"
        assert isinstance(error.cause, ValueError)

    def test_from_exception_keeps_metadata(self):
        error = from_exception(OSError("disk"), path="/tmp/x").unwrap_err()
        assert error.code is ErrorCode.E9001_UNEXPECTED_ERROR
        assert error.metadata == {"path": "/tmp/x"}


class TestAppError:
    def test_with_context_keeps_timestamp(self):
        error = validation_error("bad", field="name").unwrap_err()
        moved = error.with_context(origin="ingress", correlation_id="abc12345")
        assert moved.context.origin == "ingress"
        assert moved.context.correlation_id == "abc12345"
        assert moved.context.timestamp == error.context.timestamp
        assert moved.metadata == {"field": "name"}

    def test_str(self):
        error = AppError(code=ErrorCode.E2002_INVALID_FORMAT, message="bad")
        assert str(error).startswith("[E2002_INVALID_FORMAT] bad")


@pytest.mark.parametrize("code, status, category", [
    (ErrorCode.E2000_VALIDATION_GENERIC, 400, "validation"),
    (ErrorCode.E2030_RULE_CONFIGURATION, 400, "validation"),
    (ErrorCode.E6001_FILE_NOT_FOUND, 500, "resource"),
    (ErrorCode.E9001_UNEXPECTED_ERROR, 500, "internal"),
])
def test_error_code_mapping(code, status, category):
    assert code.http_status == status
    assert code.category == category
