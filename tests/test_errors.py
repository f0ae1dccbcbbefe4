from app.core.errors import Conflict, InternalError, InvalidState, NotFound, ValidationError


def test_error_body_merges_detail():
    err = ValidationError("Invalid status", allowed_values=["pending"])
    assert err.status_code == 400
    assert err.to_dict() == {"message": "Invalid status", "allowed_values": ["pending"]}


def test_default_messages_and_status_codes():
    assert NotFound().to_dict() == {"message": "Not found"}
    assert NotFound().status_code == 404
    assert Conflict().status_code == 409
    assert InvalidState("closed", current_status="accepted").to_dict()["current_status"] == "accepted"


def test_internal_error_hides_cause_unless_debug():
    err = InternalError("Failed to create job", error="boom")
    assert err.to_dict() == {"message": "Failed to create job"}
    assert err.to_dict(include_debug=True) == {"message": "Failed to create job", "error": "boom"}
