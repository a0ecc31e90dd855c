"""Helpers shared by the API routers."""

from .request_utils import QUESTION_BODY_OPENAPI, read_question

__all__ = ["QUESTION_BODY_OPENAPI", "read_question"]
