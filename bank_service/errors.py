"""Client errors raised by the REST resources."""

PROBLEM_BASE_URL = "https://www.jhipster.tech/problem"
DEFAULT_TYPE = f"{PROBLEM_BASE_URL}/problem-with-message"
CONSTRAINT_VIOLATION_TYPE = f"{PROBLEM_BASE_URL}/constraint-violation"

ERR_VALIDATION = "error.validation"


class BadRequestAlertException(Exception):
    """Raised when a request is well-formed but cannot be honoured.

    Rendered as a 400 problem response carrying failure-alert headers.
    """

    def __init__(self, message: str, entity_name: str, error_key: str):
        self.message = message
        self.entity_name = entity_name
        self.error_key = error_key
        super().__init__(message)

    @property
    def alert_parameters(self) -> dict:
        return {
            "message": f"error.{self.error_key}",
            "params": self.entity_name,
        }
