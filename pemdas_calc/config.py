# config.py
"""
Runtime configuration for the calculator REPL.

Values come from CALC_* environment variables (optionally via a .env file)
and are validated by a pydantic model. Command-line flags override them.
"""

import logging
import os
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_HISTORY_FILE = "~/.pemdas_calc_history"
DEFAULT_PROMPT = "Enter your expression: "

ENV_PREFIX = "CALC_"


class CalculatorConfig(BaseModel):
    """Settings for the interactive calculator."""
    trace: bool = Field(False, description="Print each pipeline step while evaluating")
    banner: bool = Field(True, description="Print the greeting banner on start")
    history_file: str = Field(DEFAULT_HISTORY_FILE, validate_default=True,
                              description="prompt_toolkit history file")
    log_level: str = Field("WARNING", description="Root logging level")
    prompt: str = DEFAULT_PROMPT

    @field_validator('history_file')
    @classmethod
    def expand_history_path(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('History file cannot be empty')
        return os.path.expanduser(v.strip())

    @field_validator('log_level')
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f'Unknown log level: {v}')
        return level


def load_config(environ: Optional[Mapping[str, str]] = None) -> CalculatorConfig:
    """Build a CalculatorConfig from CALC_* variables.

    When environ is None the process environment is used, after loading a
    .env file from the working directory if there is one.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ
    values = {}
    for name in CalculatorConfig.model_fields:
        key = ENV_PREFIX + name.upper()
        if key in environ:
            values[name] = environ[key]
    return CalculatorConfig(**values)
