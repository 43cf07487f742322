"""Excel report for smoke run results."""
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from .models import SmokeRunResult

# Prefixes spreadsheet apps treat as the start of a formula
FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r", "\n")


def sanitize_cell_value(value: Any) -> Any:
    """Neutralize values a spreadsheet would evaluate as a formula.

    Song fields are typed into the site by anyone, so they are written
    quoted when they start with a formula prefix.

    Args:
        value: Cell value to sanitize.

    Returns:
        Sanitized value, or original if safe.
    """
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return f"'{value}"
    return value


def flatten_report(report: Any) -> pd.DataFrame:
    """Turn a visibility report into ``element``/``value`` rows.

    Nested reports become dotted element names such as
    ``main_menu_items.members``.

    Args:
        report: Any object exposing ``to_dict()``.

    Returns:
        Two-column DataFrame, one row per leaf value.
    """
    flat = pd.json_normalize(report.to_dict(), sep=".").iloc[0]
    return pd.DataFrame({"element": flat.index, "value": flat.values})


def build_summary(result: SmokeRunResult) -> pd.DataFrame:
    """Build the Summary sheet for a smoke run."""
    elapsed = result.elapsed_seconds
    rows = [
        ("URL", result.url),
        ("Start Time", result.started_at.isoformat()),
        ("End Time", result.ended_at.isoformat() if result.ended_at else "N/A"),
        ("Duration", f"{int(elapsed // 60)}m {int(elapsed % 60)}s"),
        ("Songs Read", str(len(result.songs))),
        ("Initial Songs Loaded", _yes_no(result.initial_songs_loaded)),
        ("Required Fields Valid", _yes_no(result.validation.valid if result.validation else None)),
        ("Console Errors", str(len(result.console_errors))),
        ("Screenshots", ", ".join(shot.path for shot in result.screenshots) or "none"),
        ("Result", "PASS" if result.passed else "FAIL"),
    ]
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def _yes_no(flag: Optional[bool]) -> str:
    if flag is None:
        return "N/A"
    return "YES" if flag else "NO"


def save_report(result: SmokeRunResult, output_dir: Path) -> Path:
    """Save smoke run results to Excel.

    Args:
        result: Collected smoke run data.
        output_dir: Directory to save the output file.

    Returns:
        Path to the created output file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_path = output_dir / f"results_{timestamp}.xlsx"

    sheets: list[tuple[str, pd.DataFrame]] = [("Summary", build_summary(result))]
    report_sheets = [
        ("Navigation Header", result.navigation_header),
        ("Submenus", result.submenus),
        ("Header Links", result.header_links),
        ("Song Library", result.song_library),
        ("Page Load", result.page_load),
    ]
    for name, report in report_sheets:
        if report is not None:
            sheets.append((name, flatten_report(report)))

    if result.songs:
        songs_df = pd.DataFrame([song.to_dict() for song in result.songs])
        songs_df.insert(0, "row", range(len(songs_df)))
        songs_df = songs_df.apply(lambda col: col.map(sanitize_cell_value))
        sheets.append(("Songs", songs_df))

    if result.validation is not None and result.validation.issues:
        sheets.append(("Validation Issues", pd.DataFrame({"issue": result.validation.issues})))

    if result.console_errors:
        errors_df = pd.DataFrame({"error": result.console_errors})
        sheets.append(("Console Errors", errors_df.apply(lambda col: col.map(sanitize_cell_value))))

    if result.screenshots:
        sheets.append(("Screenshots", pd.DataFrame([shot.to_dict() for shot in result.screenshots])))

    with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
        workbook = writer.book
        header_format = workbook.add_format(
            {"bold": True, "bg_color": "#4F81BD", "font_color": "white"}
        )
        pass_format = workbook.add_format({"bg_color": "#C6EFCE"})
        fail_format = workbook.add_format({"bg_color": "#FFC7CE"})

        for name, df in sheets:
            df.to_excel(writer, sheet_name=name, index=False)
            worksheet = writer.sheets[name]
            for col_num, value in enumerate(df.columns.values):
                worksheet.write(0, col_num, value, header_format)
            worksheet.set_column(0, len(df.columns) - 1, 24)

            # Highlight boolean outcomes in flattened report sheets
            if list(df.columns) == ["element", "value"]:
                worksheet.conditional_format(
                    1, 1, len(df), 1,
                    {"type": "cell", "criteria": "==", "value": "TRUE", "format": pass_format},
                )
                worksheet.conditional_format(
                    1, 1, len(df), 1,
                    {"type": "cell", "criteria": "==", "value": "FALSE", "format": fail_format},
                )

    return output_path
