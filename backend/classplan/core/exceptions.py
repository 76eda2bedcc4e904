class AppError(Exception):
    """Base class for all application exceptions."""
    kind = "app_error"

    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    kind = "not_found"

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)


class GenerationError(AppError):
    """Base class for fatal timetable generation failures."""
    kind = "generation_error"

    def __init__(self, message: str, details: dict = None, status_code: int = 400):
        super().__init__(message, status_code=status_code, details=details)


class InputMissingError(GenerationError):
    """One or more required rosters is empty."""
    kind = "input_missing"

    def __init__(self, missing: list[str]):
        super().__init__(
            f"No {', '.join(missing)} found. Please add them before generating a timetable.",
            details={"missing": list(missing)},
        )
        self.missing = list(missing)


class NoTargetBatchError(GenerationError):
    """No batch matches the requested semester."""
    kind = "no_target_batch"

    def __init__(self, semester: str):
        super().__init__(
            f"No student batch found for Semester {semester}. Please create one first.",
            details={"semester": semester},
        )
        self.semester = semester


class BatchHasNoSubjectsError(GenerationError):
    """The target batch is not enrolled in any known subject."""
    kind = "batch_has_no_subjects"

    def __init__(self, batch_id: str, batch_name: str):
        super().__init__(
            f"The selected batch ({batch_name}) is not enrolled in any subjects. "
            "Please assign subjects to the batch first.",
            details={"batch_id": batch_id, "batch_name": batch_name},
        )
        self.batch_id = batch_id


class EmptyResultError(GenerationError):
    """Generation produced nothing to persist."""
    kind = "empty_result"

    def __init__(self, details: dict = None):
        super().__init__(
            "Could not generate a timetable. No available slots found. Please check your data: "
            "ensure faculty are assigned to subjects, batches are enrolled in subjects, "
            "and classrooms have enough capacity.",
            details=details,
        )


class PersistenceFailureError(GenerationError):
    """Writing the time slots failed; the timetable header has been retracted."""
    kind = "persistence_failure"

    def __init__(self, timetable_id: str, reason: str):
        super().__init__(
            f"Failed to save timetable {timetable_id}: {reason}",
            details={"timetable_id": timetable_id},
            status_code=500,
        )
        self.timetable_id = timetable_id
