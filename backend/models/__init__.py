from models.attendance import AttendanceRecord
from models.class_section import ClassSection, grade_of, sections_by_grade
from models.staff import StaffMember, StaffRole, can_cover_wing
from models.subject import SYNC_CATEGORIES, Subject, SubjectCategory
from models.substitution_record import SubstitutionRecord
from models.teacher_assignment import SubjectLoad, TeacherAssignment
from models.time_slot import MAX_SLOT, TimeSlot, Wing, has_teaching_slot, slots_for_wing, teaching_slot_count
from models.timetable_entry import EntryOrigin, TimetableEntry

__all__ = [
	"AttendanceRecord",
	"ClassSection",
	"EntryOrigin",
	"MAX_SLOT",
	"StaffMember",
	"StaffRole",
	"Subject",
	"SubjectCategory",
	"SubjectLoad",
	"SubstitutionRecord",
	"SYNC_CATEGORIES",
	"TeacherAssignment",
	"TimeSlot",
	"TimetableEntry",
	"Wing",
	"can_cover_wing",
	"grade_of",
	"has_teaching_slot",
	"sections_by_grade",
	"slots_for_wing",
	"teaching_slot_count",
]
