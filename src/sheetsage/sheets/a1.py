"""A1 notation helpers."""


def index_to_col_letter(index: int) -> str:
    """Convert 0-based index to column letter(s). 0=A, 25=Z, 26=AA."""
    if index < 0:
        raise ValueError(f"Column index must not be negative: {index}")
    result = ""
    index += 1
    while index > 0:
        index -= 1
        result = chr(ord("A") + (index % 26)) + result
        index //= 26
    return result


def to_a1(row: int, column: int) -> str:
    """Convert 1-based row and column to A1 notation."""
    if row < 1 or column < 1:
        raise ValueError(f"Row and column are 1-based, got R{row}C{column}")
    return f"{index_to_col_letter(column - 1)}{row}"


def quote_sheet_name(sheet_name: str) -> str:
    """Quote a sheet name for use in a range, escaping embedded quotes."""
    return "'" + sheet_name.replace("'", "''") + "'"
