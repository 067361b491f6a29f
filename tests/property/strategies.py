"""Hypothesis strategies for generating state dicts and edits."""

import hypothesis.strategies as st

state_keys = st.sampled_from(["hunger", "energy", "mood", "location", "meals"])

scalar_values = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-1000, max_value=1000),
    st.text(max_size=8),
)

flat_states = st.dictionaries(state_keys, scalar_values, max_size=5)


@st.composite
def edits(draw) -> tuple[str, str, object]:
    """Generate a single in-place edit: ("set", key, value) or ("delete", key, None)."""
    key = draw(state_keys)
    if draw(st.booleans()):
        return ("set", key, draw(scalar_values))
    return ("delete", key, None)

