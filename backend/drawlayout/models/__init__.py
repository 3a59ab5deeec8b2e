from drawlayout.models.draw import Draw
from drawlayout.models.draw_match import DrawMatch

__all__ = [
    "Draw",
    "DrawMatch",
]
