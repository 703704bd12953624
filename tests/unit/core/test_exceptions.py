"""
Unit Tests for the exception hierarchy and the error body it renders to
"""
from syllabus_hub.core.exceptions import (
    AuthorizationError,
    CampusHubError,
    DependentRecordsError,
    DuplicateRecordError,
    ResourceNotFoundError,
    SearchQueryRequiredError,
    ValidationError,
    error_response,
)


class TestStatusCodes:

    def test_status_codes(self):
        assert CampusHubError("boom").status_code == 500
        assert AuthorizationError().status_code == 403
        assert ResourceNotFoundError("Subject", "CS999").status_code == 404
        assert ValidationError("bad").status_code == 400

    def test_validation_family_is_400(self):
        assert SearchQueryRequiredError().status_code == 400
        assert DuplicateRecordError("taken").status_code == 400
        assert DependentRecordsError("Subject", "resources", 2).status_code == 400


class TestMessages:

    def test_not_found_message(self):
        error = ResourceNotFoundError("Subject", "CS999")

        assert error.message == "Subject 'CS999' not found"
        assert error.code == "SUBJECT_NOT_FOUND"

    def test_search_query_required(self):
        error = SearchQueryRequiredError()

        assert error.message == "Search query is required"
        assert error.details == {"field": "q"}

    def test_dependent_records_plural(self):
        error = DependentRecordsError("Subject", "resources", 3)

        assert error.message == "Cannot delete subject. It has 3 associated resources."
        assert error.details["count"] == 3

    def test_dependent_records_singular(self):
        error = DependentRecordsError("Branch", "subjects", 1)

        assert error.message == "Cannot delete branch. It has 1 associated subject."


class TestErrorResponse:

    def test_error_body_shape(self):
        body = error_response(DuplicateRecordError("User already exists", field="email"))

        assert body == {
            "success": False,
            "detail": "User already exists",
            "error": {
                "code": "DUPLICATE_RECORD",
                "message": "User already exists",
                "details": {"field": "email"},
            },
        }
