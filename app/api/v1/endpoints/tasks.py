"""Task API: thin routes delegating to task use cases."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import (
    get_assign_task_use_case,
    get_create_task_use_case,
    get_current_actor,
    get_delete_task_use_case,
    get_task_query_service,
    get_update_task_status_use_case,
    get_update_task_use_case,
    require_roles,
)
from app.application.dtos.task import TaskFilter
from app.application.use_cases.tasks import (
    AssignTaskUseCase,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    TaskQueryService,
    UpdateTaskStatusUseCase,
    UpdateTaskUseCase,
)
from app.core.limiter import limit_writes
from app.domain.enums import TaskPriority, TaskStatus, UserRole
from app.domain.exceptions import ResourceNotFoundException
from app.domain.value_objects.core import Actor
from app.schemas.task import (
    TaskAssignRequest,
    TaskCreateRequest,
    TaskResponse,
    TaskStatusUpdateRequest,
    TaskUpdateRequest,
)

router = APIRouter()

_can_create = require_roles(
    "task", "create", UserRole.ADMIN, UserRole.MANAGER, UserRole.DEVELOPER
)
_can_assign = require_roles("task", "assign", UserRole.ADMIN, UserRole.MANAGER)


@router.post("", response_model=TaskResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    actor: Annotated[Actor, Depends(_can_create)],
    use_case: Annotated[CreateTaskUseCase, Depends(get_create_task_use_case)],
):
    """Create a task. The caller becomes created_by unless an admin names someone else."""
    created = await use_case.execute(body.model_dump(exclude_none=True), actor)
    return TaskResponse.model_validate(created)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    actor: Annotated[Actor, Depends(get_current_actor)],
    query_svc: Annotated[TaskQueryService, Depends(get_task_query_service)],
    project_id: str | None = None,
    assignee_id: str | None = None,
    created_by: str | None = None,
    status: TaskStatus | None = None,
    priority: TaskPriority | None = None,
    tag: Annotated[str | None, Query(max_length=50)] = None,
):
    """List tasks matching every given filter."""
    tasks = await query_svc.list_tasks(
        TaskFilter(
            project_id=project_id,
            assignee_id=assignee_id,
            created_by=created_by,
            status=status,
            priority=priority,
            tag=tag,
        )
    )
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/assigned", response_model=list[TaskResponse])
async def list_assigned_tasks(
    actor: Annotated[Actor, Depends(get_current_actor)],
    query_svc: Annotated[TaskQueryService, Depends(get_task_query_service)],
):
    """Tasks assigned to the caller."""
    tasks = await query_svc.list_assigned_to(actor.id)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/created", response_model=list[TaskResponse])
async def list_created_tasks(
    actor: Annotated[Actor, Depends(get_current_actor)],
    query_svc: Annotated[TaskQueryService, Depends(get_task_query_service)],
):
    """Tasks created by the caller."""
    tasks = await query_svc.list_created_by(actor.id)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/project/{project_id}", response_model=list[TaskResponse])
async def list_project_tasks(
    project_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    query_svc: Annotated[TaskQueryService, Depends(get_task_query_service)],
):
    tasks = await query_svc.list_by_project(project_id)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    query_svc: Annotated[TaskQueryService, Depends(get_task_query_service)],
):
    task = await query_svc.get_task(task_id)
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse)
@limit_writes
async def update_task(
    request: Request,
    task_id: str,
    body: TaskUpdateRequest,
    actor: Annotated[Actor, Depends(get_current_actor)],
    use_case: Annotated[UpdateTaskUseCase, Depends(get_update_task_use_case)],
):
    """Partial update. Fields sent as null are cleared (assignee_id, due_date)."""
    updated = await use_case.execute(task_id, body.model_dump(exclude_unset=True), actor)
    return TaskResponse.model_validate(updated)


@router.patch("/{task_id}/status", response_model=TaskResponse)
@limit_writes
async def update_task_status(
    request: Request,
    task_id: str,
    body: TaskStatusUpdateRequest,
    actor: Annotated[Actor, Depends(get_current_actor)],
    use_case: Annotated[
        UpdateTaskStatusUseCase, Depends(get_update_task_status_use_case)
    ],
):
    """Move the task along the workflow (creator, assignee or admin)."""
    updated = await use_case.execute(task_id, body.status, actor, comment=body.comment)
    return TaskResponse.model_validate(updated)


@router.patch("/{task_id}/assign", response_model=TaskResponse)
@limit_writes
async def assign_task(
    request: Request,
    task_id: str,
    body: TaskAssignRequest,
    actor: Annotated[Actor, Depends(_can_assign)],
    use_case: Annotated[AssignTaskUseCase, Depends(get_assign_task_use_case)],
):
    """Assign the task (admins and managers)."""
    updated = await use_case.execute(task_id, body.assignee_id, notify=body.notify)
    return TaskResponse.model_validate(updated)


@router.delete("/{task_id}", status_code=204)
@limit_writes
async def delete_task(
    request: Request,
    task_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    use_case: Annotated[DeleteTaskUseCase, Depends(get_delete_task_use_case)],
) -> Response:
    """Delete the task (creator or admin)."""
    if not await use_case.execute(task_id, actor):
        raise ResourceNotFoundException("task", task_id)
    return Response(status_code=204)
