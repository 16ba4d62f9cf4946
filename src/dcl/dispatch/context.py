"""
The invocation context, captured once at process start.
"""

import os
from typing import Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from dcl.dispatch.options import GlobalOptions


def normalize_invocation_name(invocation_path: str) -> str:
    """Strip any directory component and fold case: ``/usr/bin/UpCase`` -> ``upcase``."""
    return os.path.basename(invocation_path.rstrip(os.sep)).lower()


class InvocationContext(BaseModel):
    """What this process was asked to do; immutable once built."""
    model_config = ConfigDict(frozen=True)

    invoked_name: str
    invocation_path: str = ""
    raw_args: Tuple[str, ...] = ()
    global_options: GlobalOptions = Field(default_factory=GlobalOptions)

    @classmethod
    def build(cls, invocation_path: str, raw_args: Sequence[str],
              global_options: GlobalOptions) -> "InvocationContext":
        return cls(
            invoked_name=normalize_invocation_name(invocation_path),
            invocation_path=invocation_path,
            raw_args=tuple(raw_args),
            global_options=global_options,
        )
