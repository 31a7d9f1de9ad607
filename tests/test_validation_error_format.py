from core.validation_errors import format_validation_error_details


def test_missing_request_field_summary_is_readable():
    errors = [{"type": "missing", "loc": ("body", "key"), "msg": "Field required", "input": {}}]

    details = format_validation_error_details(errors)

    assert details["summary"] == "Validation failed: missing required field: key."
    assert details["missingFields"] == ["key"]
    assert details["fieldErrors"] == [
        {
            "path": "key",
            "location": "body",
            "message": "Field required",
            "errorType": "missing",
        }
    ]


def test_notification_paths_use_default_location():
    errors = [
        {"type": "missing", "loc": ("bucket", "arn"), "msg": "Field required"},
        {"type": "int_type", "loc": ("object", "size"), "msg": "Input should be a valid integer"},
    ]

    details = format_validation_error_details(errors, default_location="notification")

    assert details["summary"] == "Validation failed: missing required field: bucket.arn."
    assert [error["path"] for error in details["fieldErrors"]] == ["bucket.arn", "object.size"]
    assert {error["location"] for error in details["fieldErrors"]} == {"notification"}


def test_root_level_error_has_root_path():
    errors = [{"type": "model_type", "loc": (), "msg": "Input should be an object"}]

    details = format_validation_error_details(errors, default_location="notification")

    assert details["fieldErrors"][0]["path"] == "(root)"
    assert details["summary"] == "Validation failed for 1 field."


def test_multiple_missing_fields_are_deduplicated_and_listed():
    errors = [
        {"type": "missing", "loc": ("body", "key"), "msg": "Field required", "input": {}},
        {"type": "missing", "loc": ("query", "bucket"), "msg": "Field required", "input": {}},
        {"type": "missing", "loc": ("body", "key"), "msg": "Field required", "input": {}},
    ]

    details = format_validation_error_details(errors)

    assert details["summary"] == "Validation failed: missing required fields: key, bucket."
    assert details["missingFields"] == ["key", "bucket"]
