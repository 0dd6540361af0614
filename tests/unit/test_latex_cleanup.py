from qbank.latex.cleanup import cleanup_delimiters


def test_nested_degree_is_flattened():
    assert cleanup_delimiters(r"$30^{$\circ$}$") == r"$30^{\circ}$"


def test_bare_nested_degree_gets_one_span():
    assert cleanup_delimiters(r"at 30^{$\circ$} now") == r"at $30^{\circ}$ now"


def test_empty_pairs_become_a_space():
    assert cleanup_delimiters("a $$ b") == "a   b"
    assert cleanup_delimiters("a $ $ b") == "a   b"


def test_real_spans_are_untouched():
    s = "$x$ and $y$"
    assert cleanup_delimiters(s) == s


def test_escaped_dollars_are_untouched():
    s = r"\$5 or \$6"
    assert cleanup_delimiters(s) == s


def test_empty_text():
    assert cleanup_delimiters("") == ""
