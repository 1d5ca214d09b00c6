"""
api/courses.py
--------------
Course catalog routes.
"""

import uuid

from fastapi import APIRouter, Request

from api.responses import INVALID_ID, bad_request, error_response, ok, parse_id
from api.schemas import CreateCourseInput, IdInput, UpdateCourseInput
from db.transaction import ExecutionContext
from models.course import Course
from repositories.errors import RepositoryError

courses_router = APIRouter(tags=["Courses"])


@courses_router.post("/createCourse")
def create_course(body: CreateCourseInput, request: Request):
    course = Course(id=uuid.uuid4(), name=body.name, url=body.url, text=body.text)
    try:
        created = request.app.state.services.courses.create(ExecutionContext.background(), course)
    except RepositoryError as e:
        return error_response(e)
    return ok(created.to_dict())


@courses_router.post("/getCourse")
def get_course(body: IdInput, request: Request):
    course_id = parse_id(body.id)
    if course_id is None:
        return bad_request(INVALID_ID)
    try:
        course = request.app.state.services.courses.get(ExecutionContext.background(), course_id)
    except RepositoryError as e:
        return error_response(e)
    return ok(course.to_dict())


@courses_router.post("/getCourses")
def get_courses(request: Request):
    try:
        courses = request.app.state.services.courses.list_all(ExecutionContext.background())
    except RepositoryError as e:
        return error_response(e)
    return ok([c.to_dict() for c in courses])


@courses_router.post("/updateCourse")
def update_course(body: UpdateCourseInput, request: Request):
    course_id = parse_id(body.id)
    if course_id is None:
        return bad_request(INVALID_ID)
    try:
        course = request.app.state.services.course_service.change(
            ExecutionContext.background(), course_id, name=body.name, url=body.url, text=body.text
        )
    except RepositoryError as e:
        return error_response(e)
    return ok(course.to_dict())


@courses_router.post("/deleteCourse")
def delete_course(body: IdInput, request: Request):
    course_id = parse_id(body.id)
    if course_id is None:
        return bad_request(INVALID_ID)
    try:
        course = request.app.state.services.courses.delete(ExecutionContext.background(), course_id)
    except RepositoryError as e:
        return error_response(e)
    return ok(course.to_dict())
