from __future__ import annotations

from textwrap import dedent

import pytest


def source(text: str) -> str:
    """Dedent a component module written inline in a test."""
    return dedent(text).lstrip("\n")


LIST_SOURCE = source("""
    export function List() {
      return (
        <section>
          <div className="x"><span>A</span></div>
          <div className="x"><span>B</span></div>
          <div className="x"><span>C</span></div>
        </section>
      );
    }
""")


@pytest.fixture
def list_source() -> str:
    return LIST_SOURCE
