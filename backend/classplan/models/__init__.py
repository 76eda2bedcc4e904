from classplan.models.batch import Batch  # noqa: F401
from classplan.models.break_period import BreakPeriod  # noqa: F401
from classplan.models.classroom import Classroom, ClassroomType  # noqa: F401
from classplan.models.faculty import Faculty  # noqa: F401
from classplan.models.subject import Subject, SubjectType  # noqa: F401
from classplan.models.timetable import TimeSlot, Timetable, TimetableStatus  # noqa: F401
