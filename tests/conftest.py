import pytest

from sales_dashboard.sheets.models import Grid


def build_grid(cells: dict[int, list[str]], rows: int = 70) -> Grid:
    """Make a grid with ``rows`` empty rows and the given 1-based rows filled in"""
    grid: Grid = [[] for _ in range(rows)]
    for row, values in cells.items():
        grid[row - 1] = list(values)
    return grid


@pytest.fixture
def dashboard_grid() -> Grid:
    """A snapshot laid out like the sales sheet"""
    cells = {
        3: ["Annual Goal", "", "$1,000,000"],
        6: ["Last Year", "", "$850,000.00"],
        16: ["Conversion", "", "0.35"],
        40: ["January", "$80,000", "$75,500", "", "", "", "$120,000", "40", "$110,000", "38"],
        41: ["February", "$82,000", "$90,250", "", "", "", "$125,000", "42", "$130,000", "45"],
        42: ["March", "$85,000", "", "", "", "", "", "", "", ""],
    }
    weeks = ["1/7/2024", "1/14/2024", "1/21/2024", "1/28/2024"]
    for offset, week_ending in enumerate(weeks):
        cells[57 + offset] = [week_ending, "20000", f"{21000 + offset * 1000}", "", "", "", "30000", "10", "28000", "9"]
    return build_grid(cells)
