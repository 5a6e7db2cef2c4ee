import pandas as pd
import pytest

from termbag.frames import normalize_term_column
from termbag.term import InvalidTermName


@pytest.fixture
def roster():
    return pd.DataFrame(
        {
            "Name": ["Alice", "Bob", "Carol", "Dave"],
            "Term": ["Winter 2024/2025", "ss25", None, "WS2025/24"],
        }
    )


def test_coerce_replaces_invalid_with_na(roster):
    """Test invalid terms become NA and valid ones are canonical."""
    result = normalize_term_column(roster, "Term", errors="coerce")
    assert result["Term"].iloc[0] == "WS2024/25"
    assert result["Term"].iloc[1] == "SS2025"
    assert pd.isna(result["Term"].iloc[2])
    assert pd.isna(result["Term"].iloc[3])
    assert list(result["Name"]) == ["Alice", "Bob", "Carol", "Dave"]


def test_ignore_keeps_invalid(roster):
    """Test invalid terms are kept unchanged."""
    result = normalize_term_column(roster, "Term", errors="ignore")
    assert result["Term"].iloc[3] == "WS2025/24"
    assert result["Term"].iloc[1] == "SS2025"


def test_raise_on_invalid(roster):
    """Test the default mode raises on the first invalid term."""
    with pytest.raises(InvalidTermName) as excinfo:
        normalize_term_column(roster, "Term")
    assert excinfo.value.value == "WS2025/24"


def test_does_not_modify_input(roster):
    """Test the input DataFrame is left alone."""
    normalize_term_column(roster, "Term", errors="coerce")
    assert roster["Term"].iloc[0] == "Winter 2024/2025"


def test_all_valid():
    """Test a column with only valid terms."""
    df = pd.DataFrame({"Term": ["WS24", "Summer 2025", "WS2099/2100"]})
    result = normalize_term_column(df, "Term")
    assert list(result["Term"]) == ["WS2024", "SS2025", "WS2099/00"]


def test_missing_column(roster):
    """Test a missing column raises KeyError."""
    with pytest.raises(KeyError):
        normalize_term_column(roster, "Semester")


def test_unknown_error_mode(roster):
    """Test an unknown errors mode raises ValueError."""
    with pytest.raises(ValueError):
        normalize_term_column(roster, "Term", errors="skip")


@pytest.mark.parametrize("errors", ["raise", "coerce", "ignore"])
def test_missing_values_pass_through(errors):
    """Test missing values are left alone in every mode."""
    df = pd.DataFrame({"Term": ["WS24", None, float("nan"), pd.NA]})
    result = normalize_term_column(df, "Term", errors=errors)
    assert result["Term"].iloc[0] == "WS2024"
    assert all(pd.isna(v) for v in result["Term"].iloc[1:])


def test_ignore_keeps_missing(roster):
    """Test the missing value in the roster survives the ignore mode."""
    result = normalize_term_column(roster, "Term", errors="ignore")
    assert pd.isna(result["Term"].iloc[2])


def test_non_scalar_cell_is_invalid():
    """Test a list in a cell is treated as an invalid term name."""
    df = pd.DataFrame({"Term": ["WS24", ["WS24", "SS25"]]})
    result = normalize_term_column(df, "Term", errors="coerce")
    assert result["Term"].iloc[0] == "WS2024"
    assert pd.isna(result["Term"].iloc[1])
    with pytest.raises(InvalidTermName):
        normalize_term_column(df, "Term")
