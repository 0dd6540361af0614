from qbank.latex.normalize import normalize_delimiters


def test_display_brackets_become_double_dollars():
    assert normalize_delimiters(r"\[ a+b \]") == "$$ a+b $$"


def test_inline_parens_drop_inner_padding():
    assert normalize_delimiters(r"Let \( x \) be real") == "Let $x$ be real"


def test_escaped_citation_brackets_are_kept():
    s = r"as shown in \[24\] and \[3, 5\]"
    assert normalize_delimiters(s) == s


def test_line_break_spacing_is_not_a_delimiter():
    s = r"a \\[2pt] b"
    assert normalize_delimiters(s) == s


def test_math_environment_gets_display_delimiters():
    s = r"\begin{aligned} a &= b \end{aligned}"
    assert normalize_delimiters(s) == "$$" + s + "$$"


def test_environment_already_in_math_is_untouched():
    s = r"$$\begin{aligned} a &= b \end{aligned}$$"
    assert normalize_delimiters(s) == s


def test_unknown_environment_is_untouched():
    s = r"\begin{tabular}{cc} a & b \end{tabular}"
    assert normalize_delimiters(s) == s


def test_normalize_is_idempotent():
    s = r"\( x \) then \[y\] and \begin{gather} z \end{gather}"
    once = normalize_delimiters(s)
    assert normalize_delimiters(once) == once


def test_empty_text():
    assert normalize_delimiters("") == ""
