from contextvars import ContextVar

from fastapi import Request

request_object: ContextVar[Request] = ContextVar("request")
