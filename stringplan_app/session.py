# stringplan_app/session.py

import uuid
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from PIL import Image


@dataclass
class StringArtSession:
    """
    Holds the decoded source image and the current intensity grid for one
    caller. Every preprocessing/planning call receives the session explicitly.
    """
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    source: Optional[Image.Image] = None
    grid: Optional[np.ndarray] = None

    @property
    def has_grid(self) -> bool:
        return self.grid is not None

    def clear_source(self) -> None:
        # next process_image() call decodes its bytes again
        self.source = None

    def reset(self) -> None:
        self.source = None
        self.grid = None
