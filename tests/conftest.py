"""Pytest configuration for the htmlintel test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests._helpers.builders import write_html


@pytest.fixture
def html_repo(tmp_path: Path) -> Path:
    """Provide a small repository of HTML documents.

    Layout::

        repo/
          elements/a-el.html      dom-module a-el with one slot
          elements/b-el.html      dom-module b-el and a second a-el
          index.html              no dom-modules
          node_modules/dep.html   ignored by default profile
          notes.txt               not HTML

    Returns
    -------
    Path
        Repository root.
    """
    root = tmp_path / "repo"
    write_html(
        root,
        "elements/a-el.html",
        """\
        <!-- The A element. -->
        <dom-module id="a-el">
          <template><slot name="content"></slot><div id="box"></div></template>
        </dom-module>
        """,
    )
    write_html(
        root,
        "elements/b-el.html",
        """\
        <dom-module id="b-el"><template><span id="label"></span></template></dom-module>
        <dom-module id="a-el"></dom-module>
        """,
    )
    write_html(root, "index.html", "<html><body><a-el></a-el></body></html>\n")
    write_html(root, "node_modules/dep.html", '<dom-module id="dep"></dom-module>\n')
    write_html(root, "notes.txt", "<dom-module id='nope'></dom-module>\n")
    return root
