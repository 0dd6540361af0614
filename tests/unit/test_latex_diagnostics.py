from qbank.latex.diagnostics import latex_stats, validate_latex


def test_balanced_text_is_valid():
    v = validate_latex(r"$\frac{a}{b}$")
    assert v.is_valid
    assert v.errors == []
    assert v.warnings == []


def test_odd_dollar_count():
    v = validate_latex("$x")
    assert not v.is_valid
    assert v.errors == ["Unmatched $ delimiters"]


def test_unclosed_brace():
    v = validate_latex(r"$\frac{a}{b$")
    assert v.errors == ["Unmatched braces"]


def test_close_before_open_is_unbalanced():
    assert validate_latex("}{").errors == ["Unmatched braces"]


def test_escaped_braces_and_dollars_are_ignored():
    v = validate_latex(r"costs \$5 in \{set\}")
    assert v.is_valid
    assert v.warnings == []


def test_bare_commands_warn():
    v = validate_latex(r"\alpha")
    assert v.is_valid
    assert v.warnings == ["Contains LaTeX commands but no delimiters - needs wrapping"]


def test_stats_count_display_and_inline_separately():
    st = latex_stats(r"$$a$$ and $b$ \alpha")
    assert st.display_math_count == 1
    assert st.inline_math_count == 1
    assert st.total_delimiters == 2
    assert st.command_count == 1
    assert st.has_issues is False


def test_stats_flag_issues():
    assert latex_stats(r"\alpha").has_issues is True
