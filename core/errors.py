class HabitError(Exception):
    """Base for per-request failures. Never fatal to the process."""
    status_code: int = 400

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__

class NotFound(HabitError):
    """Resource not found"""
    status_code = 404

class Unauthorized(HabitError):
    """Not allowed to access this resource"""
    status_code = 403

class InvalidSuggestion(HabitError):
    """Suggestion service returned malformed or incomplete data"""
    status_code = 422

class SuggestionUnavailable(HabitError):
    """Suggestion service could not be reached"""
    status_code = 502

class StoreWriteConflict(HabitError):
    """Habit was modified concurrently"""
    status_code = 409
