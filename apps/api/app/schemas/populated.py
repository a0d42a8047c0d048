"""Resource views with related documents eager-loaded."""

from app.schemas.bootcamp import Bootcamp, BootcampSummary
from app.schemas.course import Course
from app.schemas.review import Review


class BootcampWithCourses(Bootcamp):
    courses: list[Course] = []


class CourseWithBootcamp(Course):
    bootcamp: BootcampSummary


class ReviewWithBootcamp(Review):
    bootcamp: BootcampSummary
