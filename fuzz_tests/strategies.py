import hypothesis.strategies as st

names = st.from_regex(r"[A-Za-z0-9_.\-]+", fullmatch=True)
entry_lines = st.builds(
    lambda key, value: f"{{{', '.join(key)}}} = {value}",
    st.lists(names, min_size=1, max_size=4),
    st.integers(),
)
