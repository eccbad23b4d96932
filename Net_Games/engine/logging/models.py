from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class StateTraceFrame(BaseModel):
    """Full per-node state snapshot taken at ``step``."""

    evt: Literal["State"] = "State"
    step: int
    states: List[Any]


class WindowTraceFrame(BaseModel):
    """Raw action tallies of the window ending at ``step``.

    ``counts`` is the row-major flattening of the ``(nodes, actions)`` count
    matrix.
    """

    evt: Literal["Window"] = "Window"
    step: int
    actions: int
    counts: List[int]


TraceFrame = Annotated[
    Union[StateTraceFrame, WindowTraceFrame], Field(discriminator="evt")
]

trace_frame_adapter: TypeAdapter[TraceFrame] = TypeAdapter(TraceFrame)
