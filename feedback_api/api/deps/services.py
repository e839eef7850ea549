# feedback_api/api/deps/services.py
"""Providers for the service objects built once in create_app()."""
from fastapi import Request

from feedback_api.core.passwords import PasswordHasher
from feedback_api.core.security import TokenService
from feedback_api.services.forms import FormGateway
from feedback_api.services.responses import ResponseGateway
from feedback_api.services.users import UserGateway


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.passwords


def get_user_gateway(request: Request) -> UserGateway:
    return request.app.state.users


def get_form_gateway(request: Request) -> FormGateway:
    return request.app.state.forms


def get_response_gateway(request: Request) -> ResponseGateway:
    return request.app.state.responses
