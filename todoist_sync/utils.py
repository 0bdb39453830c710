import uuid
from os import getenv
from typing import Any, KeysView, Type, TypeVar

from loguru import logger

E = TypeVar('E')

API_TOKEN_ENV = 'TODOIST_API_TOKEN'


def get_all_fields_of_dataclass(cls: Type[Any]) -> KeysView[str]:
    """
    Get all fields of a dataclass class.
    """
    return cls.__dataclass_fields__.keys()


def safe_instantiate_entry(cls: Type[E], **entry_kwargs) -> E:
    """Safely instantiates a class by writing unexpected (i.e new in todoist api) fields to new_api_kwargs"""
    class_fields = get_all_fields_of_dataclass(cls)

    assert 'new_api_kwargs' in class_fields, f"kwargs field is not in {cls.__name__} class"

    filtered_kwargs = {k: v for k, v in entry_kwargs.items() if k in class_fields and k != 'new_api_kwargs'}
    unexpected_kwargs = {k: v for k, v in entry_kwargs.items() if k not in class_fields}
    if unexpected_kwargs:
        logger.trace(f'{cls.__name__}: keeping {len(unexpected_kwargs)} unknown fields in new_api_kwargs')
    return cls(**filtered_kwargs, new_api_kwargs=unexpected_kwargs)


def new_uuid() -> str:
    return str(uuid.uuid4())


def get_api_token() -> str:
    """Assuming that ENV variables are set"""
    return getenv(API_TOKEN_ENV) or ""


def redact_token(token: str) -> str:
    if len(token) <= 4:
        return '*' * len(token)
    return f'{token[:2]}{"*" * (len(token) - 4)}{token[-2:]}'
