"""HTML pages: user list with form/confirm overlays, and the user detail page.

Every action is a POST that mutates the view controller and redirects back to
the list, which re-renders from the controller state.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from userdesk_api.services import get_user_store, get_view_controller
from userdesk_api.views import templates
from userdesk_api.views.controller import InvalidTransition, ViewController, ViewState
from userdesk_common.errors import FetchFailed, UserNotFound
from userdesk_common.models.user import UserDraft
from userdesk_common.services.user_store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"], include_in_schema=False)

# (form key, label, required)
FORM_FIELDS: list[tuple[str, str, bool]] = [
    ("name", "Name", True),
    ("email", "Email", True),
    ("phone", "Phone", True),
    ("username", "Username", True),
    ("address.street", "Street", True),
    ("address.city", "City", True),
    ("company.name", "Company Name", False),
    ("website", "Website", False),
]


def _back_to_list() -> RedirectResponse:
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/", response_class=HTMLResponse)
async def list_page(
    request: Request,
    q: str | None = None,
    controller: ViewController = Depends(get_view_controller),
) -> HTMLResponse:
    """User table, filtered by the current search text."""
    if controller.state is ViewState.IDLE:
        await controller.start()
    if q is not None:
        controller.set_search(q)

    return templates.TemplateResponse(
        request,
        "users.html",
        {
            "controller": controller,
            "users": controller.visible_users(),
            "form_fields": FORM_FIELDS,
        },
    )


@router.get("/user/{user_id}", response_class=HTMLResponse)
async def user_detail_page(
    request: Request,
    user_id: int,
    store: UserStore = Depends(get_user_store),
) -> HTMLResponse:
    user = None
    error = None
    status_code = status.HTTP_200_OK
    try:
        user = await store.get_user(user_id)
    except UserNotFound:
        error = "Error fetching user details."
        status_code = status.HTTP_404_NOT_FOUND
    except FetchFailed:
        error = "Error fetching user details."
        status_code = status.HTTP_502_BAD_GATEWAY

    return templates.TemplateResponse(
        request,
        "user_detail.html",
        {"user": user, "error": error},
        status_code=status_code,
    )


@router.post("/actions/reload")
async def reload_action(controller: ViewController = Depends(get_view_controller)) -> RedirectResponse:
    try:
        await controller.refresh()
    except InvalidTransition as e:
        logger.warning("Ignored reload: %s", e)
    return _back_to_list()


@router.post("/actions/create")
async def open_create_action(controller: ViewController = Depends(get_view_controller)) -> RedirectResponse:
    try:
        controller.open_create()
    except InvalidTransition as e:
        logger.warning("Ignored create: %s", e)
    return _back_to_list()


@router.post("/actions/edit/{user_id}")
async def open_edit_action(
    user_id: int,
    controller: ViewController = Depends(get_view_controller),
) -> RedirectResponse:
    try:
        controller.open_edit(user_id)
    except (InvalidTransition, UserNotFound) as e:
        logger.warning("Ignored edit of user %s: %s", user_id, e)
    return _back_to_list()


@router.post("/actions/form/submit")
async def submit_form_action(
    request: Request,
    controller: ViewController = Depends(get_view_controller),
) -> RedirectResponse:
    form = await request.form()
    try:
        await controller.submit(UserDraft.from_form(form))
    except InvalidTransition as e:
        logger.warning("Ignored form submission: %s", e)
    return _back_to_list()


@router.post("/actions/form/cancel")
async def cancel_form_action(controller: ViewController = Depends(get_view_controller)) -> RedirectResponse:
    try:
        controller.cancel_form()
    except InvalidTransition as e:
        logger.warning("Ignored form cancel: %s", e)
    return _back_to_list()


@router.post("/actions/delete/confirm")
async def confirm_delete_action(controller: ViewController = Depends(get_view_controller)) -> RedirectResponse:
    try:
        await controller.confirm_delete()
    except InvalidTransition as e:
        logger.warning("Ignored delete confirmation: %s", e)
    return _back_to_list()


@router.post("/actions/delete/cancel")
async def cancel_delete_action(controller: ViewController = Depends(get_view_controller)) -> RedirectResponse:
    try:
        controller.cancel_delete()
    except InvalidTransition as e:
        logger.warning("Ignored delete cancel: %s", e)
    return _back_to_list()


@router.post("/actions/delete/{user_id}")
async def request_delete_action(
    user_id: int,
    controller: ViewController = Depends(get_view_controller),
) -> RedirectResponse:
    try:
        controller.request_delete(user_id)
    except (InvalidTransition, UserNotFound) as e:
        logger.warning("Ignored delete of user %s: %s", user_id, e)
    return _back_to_list()


@router.post("/actions/notice/dismiss")
async def dismiss_notice_action(controller: ViewController = Depends(get_view_controller)) -> RedirectResponse:
    controller.dismiss_notice()
    return _back_to_list()
