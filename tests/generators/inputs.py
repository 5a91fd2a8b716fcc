import hypothesis.strategies as st

# Bytes that the test grammars can make partial sense of, so that both
# successful and failing parses are common.
grammar_bytes = st.text(alphabet="ab-(0)19 ,", max_size=30).map(
    lambda s: s.encode("ascii")
)

lines = st.text(alphabet="ab\n", max_size=40).map(lambda s: s.encode("ascii"))

int64s = st.integers(min_value=-(2**63 - 1), max_value=2**63 - 1)


@st.composite
def stream_operations(draw, length, max_size=20):
    """
    List of ("seek", target) and ("read", size) operations on a stream
    of the given length.
    """
    operations = st.one_of(
        st.tuples(st.just("seek"), st.integers(min_value=0, max_value=length)),
        st.tuples(st.just("read"), st.integers(min_value=0, max_value=length)),
    )
    return draw(st.lists(operations, max_size=max_size))


def expected_location(data, position):
    """
    :returns: The (line, col) of position in data, computed directly.
    """
    line = data.count(b"\n", 0, position)
    col = position - (data.rfind(b"\n", 0, position) + 1)
    return line, col
