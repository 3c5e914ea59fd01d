"""Shared hypothesis strategies for partials property-based testing.

- **Names**: identifiers and partial paths built around them
- **Collections**: model instances, homogeneous or mixed

These are building blocks -- individual test modules compose them into
property-specific strategies.
"""

from __future__ import annotations

from hypothesis import strategies as st

from .models import Comment, Post, User

# ---------------------------------------------------------------------------
# Name strategies
# ---------------------------------------------------------------------------

# Names that survive the leading-underscore strip unchanged
partial_name = st.from_regex(r"[a-z][a-z0-9_]{0,12}", fullmatch=True)

_directory = st.from_regex(r"[a-z][a-z0-9_]{0,8}", fullmatch=True)
_extension = st.sampled_from(["", ".html", ".html.jinja", ".jinja", ".txt"])


@st.composite
def partial_path(draw: st.DrawFn) -> tuple[str, str]:
    """A partial path and the variable name it should bind."""
    name = draw(partial_name)
    directories = draw(st.lists(_directory, max_size=3))
    underscore = draw(st.sampled_from(["", "_"]))
    path = "/".join([*directories, f"{underscore}{name}{draw(_extension)}"])
    return path, name


# Arbitrary text, valid identifiers or not
any_name = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    min_size=0,
    max_size=20,
)

# ---------------------------------------------------------------------------
# Collection strategies
# ---------------------------------------------------------------------------

_word = st.text(alphabet="abcdefghij", min_size=1, max_size=5)

model = st.one_of(
    _word.map(Post),
    _word.map(Comment),
    _word.map(User),
)

users = st.lists(_word.map(User), min_size=1, max_size=20)

mixed_models = st.lists(model, min_size=0, max_size=20)
