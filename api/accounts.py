"""
api/accounts.py
---------------
Registration, sign-in and account maintenance routes.
"""

from fastapi import APIRouter, Request

from api.responses import INVALID_ID, bad_request, error_response, ok, parse_id
from api.schemas import AuthInput, IdInput, SignInInput, UpdateUserInput
from db.transaction import ExecutionContext
from repositories.errors import RepositoryError

accounts_router = APIRouter(tags=["Accounts"])


@accounts_router.post("/registration")
def register(body: AuthInput, request: Request):
    auth = request.app.state.services.auth
    try:
        account = auth.register(ExecutionContext.background(), body.email, body.password, body.role)
    except RepositoryError as e:
        return error_response(e)
    return ok(account.to_public_dict())


@accounts_router.post("/signIn")
def sign_in(body: SignInInput, request: Request):
    auth = request.app.state.services.auth
    try:
        account = auth.sign_in(ExecutionContext.background(), body.email, body.password)
    except RepositoryError as e:
        return error_response(e)
    return ok(account.to_public_dict())


@accounts_router.post("/getUser")
def get_user(body: IdInput, request: Request):
    account_id = parse_id(body.id)
    if account_id is None:
        return bad_request(INVALID_ID)
    try:
        account = request.app.state.services.accounts.get(ExecutionContext.background(), account_id)
    except RepositoryError as e:
        return error_response(e)
    return ok(account.to_public_dict())


@accounts_router.post("/updateUser")
def update_user(body: UpdateUserInput, request: Request):
    account_id = parse_id(body.id)
    if account_id is None:
        return bad_request(INVALID_ID)
    try:
        account = request.app.state.services.account_service.change(
            ExecutionContext.background(), account_id, email=body.email, secret=body.password
        )
    except RepositoryError as e:
        return error_response(e)
    return ok(account.to_public_dict())


@accounts_router.post("/deleteUser")
def delete_user(body: IdInput, request: Request):
    account_id = parse_id(body.id)
    if account_id is None:
        return bad_request(INVALID_ID)
    try:
        account = request.app.state.services.accounts.delete(ExecutionContext.background(), account_id)
    except RepositoryError as e:
        return error_response(e)
    return ok(account.to_public_dict())
