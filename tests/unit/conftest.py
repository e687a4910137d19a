"""
Pytest configuration for unit tests.

Provides builders for register-shaped HTML pages. The register's real
markup is irregular: rows are not always closed, the decision date column
moves, and some variants put the category anchor in a heading table with
the data in the next table. The builders reproduce those shapes.
"""

from typing import List, Optional, Sequence, Tuple

import pytest

from fmcsa_register.models import CategoryDescriptor


Row = Tuple[str, Sequence[str]]


def _cells(number: str, cells: Sequence[str]) -> str:
    return f'<th scope="row">{number}</th>' + ''.join(f'<td>{c}</td>' for c in cells)


def _rows(rows: List[Row], close_rows: bool = True) -> str:
    if close_rows:
        return ''.join(f'<tr>{_cells(n, c)}</tr>' for n, c in rows)
    # No row containers at all: header and data cells are one flat run
    return ''.join(_cells(n, c) for n, c in rows)


@pytest.fixture
def sibling_section():
    """Builder: anchor immediately followed by its data table."""
    def _build(code: str, rows: List[Row], close_rows: bool = True) -> str:
        return f'<a name="{code}"></a>\n<table border="1">{_rows(rows, close_rows)}</table>\n'
    return _build


@pytest.fixture
def heading_section():
    """Builder: anchor inside a heading table, data in the next table."""
    def _build(code: str, label: str, rows: List[Row]) -> str:
        return (
            f'<table><tr><td><a name="{code}"><b>{label}</b></a></td></tr></table>\n'
            f'<table border="1">{_rows(rows)}</table>\n'
        )
    return _build


@pytest.fixture
def register_page():
    """Builder: full register page around section snippets."""
    def _build(*sections: str, marker: Optional[str] = "FMCSA REGISTER") -> str:
        heading = f'<h2>{marker} for the selected date</h2>' if marker else '<h2>Notice</h2>'
        body = ''.join(sections)
        return (
            '<html><head><title>Register</title></head><body>'
            f'{heading}\n{body}'
            '</body></html>'
        )
    return _build


@pytest.fixture
def small_catalog():
    """Three-category catalog in a fixed order."""
    return (
        CategoryDescriptor(code='NC', label='NAME CHANGE'),
        CategoryDescriptor(code='CX2', label='CERTIFICATE OF REGISTRATION'),
        CategoryDescriptor(code='REV', label='REVOCATION'),
    )
