from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from visu3d.errors import ConfigurationError


@dataclass(slots=True)
class RenderSettings:
    max_reflections: int = 0
    multithread: bool = True
    processes: Optional[int] = None  # worker count when multithread, None means one per CPU

    def __post_init__(self) -> None:
        self.max_reflections = int(self.max_reflections)
        if self.max_reflections < 0:
            raise ConfigurationError("max_reflections must be >= 0, got {}".format(self.max_reflections))
        if self.processes is not None and self.processes <= 0:
            raise ConfigurationError("processes must be positive, got {}".format(self.processes))

    def __str__(self) -> str:
        return (
            "RayTracer\n"
            f"  max reflections : {self.max_reflections}\n"
            f"  multithread     : {self.multithread}"
        )
