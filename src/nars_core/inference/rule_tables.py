"""Dispatch of a (task link, term link) pair to the applicable rules.

Only link-type pairs with a rule family implemented here derive anything.
The remaining pairs are accepted and produce no task.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nars_core.entity.sentence import Sentence
from nars_core.inference import local_rules, structural_rules, syllogistic_rules
from nars_core.language.templates import LinkType
from nars_core.language.term import CompoundTerm, Connector, Relation, Statement, Term, is_compound, is_statement

if TYPE_CHECKING:
    from nars_core.entity.links import TaskLink, TermLink
    from nars_core.storage.context import CycleContext


def reason(ctx: CycleContext, task_link: TaskLink, term_link: TermLink) -> None:
    task = ctx.current_task
    if task is None:
        return
    task_term = task.content
    belief_term = term_link.target
    belief_concept = ctx.memory.term_to_concept(belief_term)
    belief = belief_concept.get_belief(ctx, task) if belief_concept is not None else None
    ctx.current_belief = belief
    if belief is not None:
        local_rules.match(ctx, task, belief)
    if not ctx.no_result() and task.sentence.is_judgment:
        return
    b_index = term_link.get_index(0)
    if task_link.link_type is LinkType.SELF:
        if belief is None:
            return
        if term_link.link_type is LinkType.COMPONENT_STATEMENT:
            syllogistic_rules.detachment(ctx, task.sentence, belief, b_index)
        elif term_link.link_type is LinkType.COMPOUND_STATEMENT:
            syllogistic_rules.detachment(ctx, belief, task.sentence, b_index)
    elif task_link.link_type is LinkType.COMPOUND_STATEMENT:
        if term_link.link_type is LinkType.COMPOUND_STATEMENT and belief is not None:
            _syllogisms(ctx, task_link, term_link, task_term, belief_term, belief)


def transform_task(ctx: CycleContext, task_link: TaskLink) -> None:
    """Apply product/image transforms reached through a transform link."""
    task = ctx.current_task
    if task is None:
        return
    content = task.content
    indices = task_link.indices
    inh: Term | None = None
    if len(indices) == 2 or is_statement(content, Relation.INHERITANCE):
        inh = content
    elif len(indices) == 3 and isinstance(content, CompoundTerm):
        inh = content.component_at(indices[0])
    elif len(indices) == 4 and isinstance(content, CompoundTerm):
        component = content.component_at(indices[0])
        conditional = is_statement(content, Relation.EQUIVALENCE) or (
            is_statement(content, Relation.IMPLICATION) and indices[0] == 0
        )
        if conditional and is_compound(component, Connector.CONJUNCTION):
            inh = component.component_at(indices[1])
    if isinstance(inh, Statement) and inh.relation is Relation.INHERITANCE:
        structural_rules.transform_product_image(ctx, inh, content, indices, task)


def _index_to_figure(link1: TaskLink | TermLink, link2: TaskLink | TermLink) -> int:
    return (link1.get_index(0) + 1) * 10 + (link2.get_index(0) + 1)


def _syllogisms(
    ctx: CycleContext,
    task_link: TaskLink,
    term_link: TermLink,
    task_term: Term,
    belief_term: Term,
    belief: Sentence,
) -> None:
    """Two statements sharing a term, dispatched on their relations."""
    if not isinstance(task_term, Statement) or not isinstance(belief_term, Statement):
        return
    task_sentence = ctx.current_task.sentence
    task_relation = task_term.relation
    belief_relation = belief_term.relation
    if task_relation is Relation.INHERITANCE or task_relation is Relation.IMPLICATION:
        if belief_relation is task_relation:
            figure = _index_to_figure(task_link, term_link)
            _asymmetric_asymmetric(ctx, task_sentence, belief, figure)
        elif belief_relation is task_relation.symmetric:
            figure = _index_to_figure(task_link, term_link)
            _asymmetric_symmetric(ctx, task_sentence, belief, figure)
        elif task_relation is Relation.INHERITANCE:
            _detachment_with_var(ctx, belief, task_sentence, term_link.get_index(0))
        elif belief_relation is Relation.INHERITANCE:
            _detachment_with_var(ctx, task_sentence, belief, task_link.get_index(0))
    else:
        if belief_relation is task_relation.asymmetric:
            figure = _index_to_figure(term_link, task_link)
            _asymmetric_symmetric(ctx, belief, task_sentence, figure)
        elif belief_relation is task_relation:
            figure = _index_to_figure(term_link, task_link)
            _symmetric_symmetric(ctx, belief, task_sentence, figure)
        elif task_relation is Relation.EQUIVALENCE and belief_relation is Relation.INHERITANCE:
            _detachment_with_var(ctx, task_sentence, belief, task_link.get_index(0))


def _asymmetric_asymmetric(ctx: CycleContext, sentence: Sentence, belief: Sentence, figure: int) -> None:
    s1 = sentence.content
    s2 = belief.content
    if not isinstance(s1, Statement) or not isinstance(s2, Statement):
        return
    if figure == 11:
        if s1.subject == s2.subject and s1 != s2:
            syllogistic_rules.abd_ind_com(ctx, s2.predicate, s1.predicate, sentence, belief)
    elif figure == 12:
        if s1.subject == s2.predicate and s1 != s2:
            t1, t2 = s2.subject, s1.predicate
            if t1 == t2:
                local_rules.match_reverse(ctx)
            else:
                syllogistic_rules.ded_exe(ctx, t1, t2, sentence, belief)
    elif figure == 21:
        if s1.predicate == s2.subject and s1 != s2:
            t1, t2 = s1.subject, s2.predicate
            if t1 == t2:
                local_rules.match_reverse(ctx)
            else:
                syllogistic_rules.ded_exe(ctx, t1, t2, sentence, belief)
    elif figure == 22:
        if s1.predicate == s2.predicate and s1 != s2:
            syllogistic_rules.abd_ind_com(ctx, s1.subject, s2.subject, sentence, belief)


def _asymmetric_symmetric(ctx: CycleContext, asym: Sentence, sym: Sentence, figure: int) -> None:
    asym_st = asym.content
    sym_st = sym.content
    if not isinstance(asym_st, Statement) or not isinstance(sym_st, Statement):
        return
    if figure == 11:
        if asym_st.subject == sym_st.subject:
            t1, t2 = asym_st.predicate, sym_st.predicate
            if t1 == t2:
                local_rules.match_asym_sym(ctx, asym, sym)
            else:
                syllogistic_rules.analogy(ctx, t2, t1, asym, sym)
    elif figure == 12:
        if asym_st.subject == sym_st.predicate:
            t1, t2 = asym_st.predicate, sym_st.subject
            if t1 == t2:
                local_rules.match_asym_sym(ctx, asym, sym)
            else:
                syllogistic_rules.analogy(ctx, t2, t1, asym, sym)
    elif figure == 21:
        if asym_st.predicate == sym_st.subject:
            t1, t2 = asym_st.subject, sym_st.predicate
            if t1 == t2:
                local_rules.match_asym_sym(ctx, asym, sym)
            else:
                syllogistic_rules.analogy(ctx, t1, t2, asym, sym)
    elif figure == 22:
        if asym_st.predicate == sym_st.predicate:
            t1, t2 = asym_st.subject, sym_st.subject
            if t1 == t2:
                local_rules.match_asym_sym(ctx, asym, sym)
            else:
                syllogistic_rules.analogy(ctx, t1, t2, asym, sym)


def _symmetric_symmetric(ctx: CycleContext, belief: Sentence, sentence: Sentence, figure: int) -> None:
    s1 = belief.content
    s2 = sentence.content
    if not isinstance(s1, Statement) or not isinstance(s2, Statement):
        return
    if figure == 11:
        if s1.subject == s2.subject:
            syllogistic_rules.resemblance(ctx, s1.predicate, s2.predicate, belief, sentence)
    elif figure == 12:
        if s1.subject == s2.predicate:
            syllogistic_rules.resemblance(ctx, s1.predicate, s2.subject, belief, sentence)
    elif figure == 21:
        if s1.predicate == s2.subject:
            syllogistic_rules.resemblance(ctx, s1.subject, s2.predicate, belief, sentence)
    elif figure == 22:
        if s1.predicate == s2.predicate:
            syllogistic_rules.resemblance(ctx, s1.subject, s2.subject, belief, sentence)


def _detachment_with_var(ctx: CycleContext, main_sentence: Sentence, sub_sentence: Sentence, index: int) -> None:
    statement = main_sentence.content
    if not isinstance(statement, Statement) or not 0 <= index < 2:
        return
    component = statement.components[index]
    if ctx.current_belief is None:
        return
    if (is_statement(component, Relation.INHERITANCE) or is_compound(component, Connector.NEGATION)) and component.is_constant:
        syllogistic_rules.detachment(ctx, main_sentence, sub_sentence, index)
