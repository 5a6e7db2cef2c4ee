"""Normalize term names held in pandas DataFrames.

Rosters and gradebook exports often carry a free-text term column. These helpers
rewrite such a column into canonical term names so that rows can be grouped and
merged on it.
"""

import pandas as pd
from loguru import logger

from termbag.term import InvalidTermName, to_canonical

ERROR_MODES = ("raise", "coerce", "ignore")


def normalize_term_column(
    df: pd.DataFrame, column: str, errors: str = "raise"
) -> pd.DataFrame:
    """Return a copy of `df` with `column` converted to canonical term names.

    Missing values are left as they are.

    Args:
        df (pd.DataFrame): The data to normalize.
        column (str): Name of the column holding term names.
        errors (str): What to do with invalid term names:
            - "raise": raise InvalidTermName on the first one
            - "coerce": replace them with `pd.NA`
            - "ignore": keep the original value

    Returns:
        pd.DataFrame: A new DataFrame; `df` is not modified.

    Raises:
        KeyError: If `column` is not in `df`.
        ValueError: If `errors` is not one of the modes above.
        InvalidTermName: If `errors` is "raise" and a value is invalid.
    """
    if errors not in ERROR_MODES:
        raise ValueError(f"errors must be one of {ERROR_MODES}, got {errors!r}")
    if column not in df.columns:
        raise KeyError(f"Column not found: {column}")

    result = df.copy()
    values = []
    invalid = 0
    for index, raw in result[column].items():
        if pd.api.types.is_scalar(raw) and pd.isna(raw):
            values.append(raw)
            continue
        canonical = to_canonical(raw)
        if canonical:
            values.append(canonical)
            continue
        invalid += 1
        if errors == "raise":
            logger.error(f"Invalid term name {raw!r} in row {index}")
            raise InvalidTermName(raw)
        logger.debug(f"Row {index}: invalid term name {raw!r} ({errors})")
        values.append(pd.NA if errors == "coerce" else raw)

    result[column] = pd.Series(values, index=result.index, dtype=object)
    logger.info(
        f"Normalized column '{column}': {invalid} of {len(values)} values invalid"
    )
    return result
