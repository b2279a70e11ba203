from typing import Tuple

from match3.constants import BOARD_FILL_PCT


def compute_board_geometry(
    width: float,
    height: float,
    size: int,
    x: float = 0.0,
    y: float = 0.0,
) -> Tuple[int, float, float]:
    """Return (cell_size, start_x, start_y) for a board of ``size`` cells.

    The board takes ``BOARD_FILL_PCT`` of the shorter side of the area at
    (x, y, width, height) and is centred in it. Keeps gesture mapping
    consistent with however the host draws the board.
    """
    side = min(width, height)
    cell_size = max(1, int(BOARD_FILL_PCT * side / size))
    board_px = cell_size * size
    start_x = x + (width - board_px) / 2
    start_y = y + (height - board_px) / 2
    return cell_size, start_x, start_y
