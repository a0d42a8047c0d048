"""Course routes, including those nested under a bootcamp."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.domain.list_query import ListQuerySpec
from app.routes.dependencies import PublisherPrincipal, get_course_service, get_list_query
from app.schemas.course import Course, CreateCourseRequest, UpdateCourseRequest
from app.schemas.envelope import CollectionResponse, DataResponse, EmptyResponse, PaginatedResponse
from app.schemas.error import ErrorResponse
from app.schemas.populated import CourseWithBootcamp
from app.services.courses import CourseService

router = APIRouter(tags=["Courses"])

BootcampId = Annotated[str, Path(alias="bootcampId")]
CourseId = Annotated[str, Path(alias="courseId")]
Service = Annotated[CourseService, Depends(get_course_service)]


@router.get("/courses", response_model=PaginatedResponse, responses={400: {"model": ErrorResponse}})
async def list_courses(
    query: Annotated[ListQuerySpec, Depends(get_list_query)],
    service: Service,
) -> PaginatedResponse:
    result = service.list_courses(query)
    return PaginatedResponse(count=result.count, pagination=result.pagination, data=result.items)


@router.get(
    "/bootcamps/{bootcampId}/courses",
    response_model=CollectionResponse[Course],
    responses={404: {"model": ErrorResponse}},
)
async def list_bootcamp_courses(bootcamp_id: BootcampId, service: Service) -> CollectionResponse[Course]:
    courses = service.list_bootcamp_courses(bootcamp_id)
    return CollectionResponse(count=len(courses), data=courses)


@router.post(
    "/bootcamps/{bootcampId}/courses",
    response_model=DataResponse[Course],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def create_course(
    bootcamp_id: BootcampId,
    payload: CreateCourseRequest,
    principal: PublisherPrincipal,
    service: Service,
) -> DataResponse[Course]:
    return DataResponse(data=service.create_course(principal=principal, bootcamp_id=bootcamp_id, payload=payload))


@router.get(
    "/courses/{courseId}",
    response_model=DataResponse[CourseWithBootcamp],
    responses={404: {"model": ErrorResponse}},
)
async def get_course(course_id: CourseId, service: Service) -> DataResponse[CourseWithBootcamp]:
    return DataResponse(data=service.get_course(course_id))


@router.put(
    "/courses/{courseId}",
    response_model=DataResponse[Course],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_course(
    course_id: CourseId,
    payload: UpdateCourseRequest,
    principal: PublisherPrincipal,
    service: Service,
) -> DataResponse[Course]:
    return DataResponse(data=service.update_course(principal=principal, course_id=course_id, payload=payload))


@router.delete(
    "/courses/{courseId}",
    response_model=EmptyResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_course(course_id: CourseId, principal: PublisherPrincipal, service: Service) -> EmptyResponse:
    service.delete_course(principal=principal, course_id=course_id)
    return EmptyResponse()
