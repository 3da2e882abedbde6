"""Time scales & epoch representations used by the frame reductions."""

from __future__ import annotations
