from sqladmin import ModelView

from enrollhub.course.models import Course
from enrollhub.enrollment.models import Enrollment
from enrollhub.user.models import User


class UserAdmin(ModelView, model=User):
    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-user"

    column_list = [
        User.id,
        User.email,
        User.first_name,
        User.last_name,
        User.phone_number,
        User.role,
        User.created_at,
        User.updated_at,
    ]
    column_searchable_list = [User.email, User.first_name, User.last_name]
    column_sortable_list = [User.id, User.email, User.role, User.created_at]
    # Hashes are never shown or edited through the panel.
    column_details_exclude_list = [
        User.password,
        User.reset_password_token,
        User.reset_password_expires_at,
    ]
    form_excluded_columns = [
        User.password,
        User.reset_password_token,
        User.reset_password_expires_at,
        User.created_at,
        User.updated_at,
    ]
    can_create = False


class CourseAdmin(ModelView, model=Course):
    name = "Course"
    name_plural = "Courses"
    icon = "fa-solid fa-book"

    column_list = [
        Course.id,
        Course.title,
        Course.category,
        Course.level,
        Course.instructor,
        Course.price,
        Course.duration,
        Course.status,
        Course.popularity,
    ]
    column_searchable_list = [Course.title, Course.category, Course.instructor]
    column_sortable_list = [getattr(Course, field) for field in Course.model_fields]
    form_excluded_columns = [Course.created_at, Course.updated_at]


class EnrollmentAdmin(ModelView, model=Enrollment):
    name = "Enrollment"
    name_plural = "Enrollments"
    icon = "fa-solid fa-link"

    column_list = [
        Enrollment.id,
        Enrollment.user_id,
        Enrollment.course_id,
        Enrollment.created_at,
    ]
    column_sortable_list = [Enrollment.id, Enrollment.user_id, Enrollment.course_id]
    can_edit = False
