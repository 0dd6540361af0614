from qbank.latex.config import DEFAULT_CONFIG
from qbank.latex.rules import wrap_comparison_lines, wrap_equations, wrap_residual_tokens, wrap_trig_degrees
from qbank.latex.spans import SpanTable


def _run(rule, text):
    spans = SpanTable(text)
    return spans.restore(rule(text, spans, DEFAULT_CONFIG))


def test_trig_with_degree_is_one_span():
    assert _run(wrap_trig_degrees, r"\tan 60^{\circ}") == r"$\tan 60^{\circ}$"


def test_non_trig_command_is_left_for_later_rules():
    s = r"\log 10^{\circ}"
    assert _run(wrap_trig_degrees, s) == s


def test_comparison_line_is_wrapped_whole():
    assert _run(wrap_comparison_lines, r"\frac{a}{b} = \sqrt{c}") == r"$\frac{a}{b} = \sqrt{c}$"


def test_comparison_line_starting_like_a_sentence_is_skipped():
    s = r"Hence \frac{a}{b} = \sqrt{c}"
    assert _run(wrap_comparison_lines, s) == s


def test_equation_stops_before_clause_keyword():
    assert _run(wrap_equations, "E = mc^{2} where c is light speed") == "$E = mc^{2}$ where c is light speed"


def test_equation_stops_at_sentence_end():
    assert _run(wrap_equations, r"So \lambda = 2 d. Next") == r"So $\lambda = 2 d$. Next"


def test_plain_assignment_is_prose():
    s = "Hence x = 5."
    assert _run(wrap_equations, s) == s


def test_residual_command_with_arguments_and_script():
    assert _run(wrap_residual_tokens, r"use \frac{a}{b}^{2} now") == r"use $\frac{a}{b}^{2}$ now"


def test_residual_scripted_identifier():
    assert _run(wrap_residual_tokens, "value x_{0} is known") == "value $x_{0}$ is known"


def test_residual_degree_is_kept_whole():
    assert _run(wrap_residual_tokens, r"angle is 30^{\circ} here") == r"angle is $30^{\circ}$ here"


def test_residual_commands_do_not_cross_lines():
    assert _run(wrap_residual_tokens, "\\alpha\n\\beta") == "$\\alpha$\n$\\beta$"


def test_equation_never_starts_inside_a_command_name():
    out = _run(wrap_equations, r"Angular frequency \omega_0 = 2\pi f.")
    assert out == r"Angular frequency $\omega_0 = 2\pi f$."
    assert "\\$" not in out


def test_equation_lhs_takes_command_arguments():
    assert _run(wrap_equations, r"\frac{a}{b} = c") == r"$\frac{a}{b} = c$"
    assert _run(wrap_equations, r"\sqrt{2} = 1.41") == r"$\sqrt{2} = 1.41$"


def test_equation_lhs_takes_degree_notation():
    assert _run(wrap_equations, r"30^{\circ} = x") == r"$30^{\circ} = x$"


def test_command_after_line_break_is_not_wrapped():
    s = r"a \\alpha b"
    assert _run(wrap_residual_tokens, s) == s
