from .branch import Branch
from .role import Role
from .user import User
from .student import Student
from .subjects import Subject
from .blueprint import InternalExamBlueprint
from .sub_question import InternalSubQuestion
from .sub_question_mark import StudentSubQuestionMark
from .internal_total import StudentInternalTotal
from .component_config import SubjectComponentConfig, COMPONENTS
from .component_mark import StudentComponentMark
from .overall_total import StudentOverallTotal
__all__ = ["Branch", "Role", "User", "Student", "Subject", "InternalExamBlueprint", "InternalSubQuestion", "StudentSubQuestionMark", "StudentInternalTotal", "SubjectComponentConfig", "COMPONENTS", "StudentComponentMark", "StudentOverallTotal"]
