import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from webqa_testgen.data.page_structures import ElementRecord, PageAnalysis


@dataclass(frozen=True)
class ElementPattern:
    """Case-insensitive containment match on element attributes.

    An element matches if any attribute in ``attributes`` contains one of
    ``needles``, or if its subtype is exactly one of ``subtypes``.
    """

    attributes: Tuple[str, ...]
    needles: Tuple[str, ...]
    subtypes: Tuple[str, ...] = ()

    def matches(self, element: ElementRecord) -> bool:
        for attribute in self.attributes:
            value = getattr(element, attribute, None)
            if value and any(needle in value.lower() for needle in self.needles):
                return True
        return element.type is not None and element.type in self.subtypes

    def first_match(self, elements: Iterable[ElementRecord]) -> Optional[ElementRecord]:
        return next((el for el in elements if self.matches(el)), None)


@dataclass(frozen=True)
class StepRule:
    parameter: str
    pattern: ElementPattern


@dataclass(frozen=True)
class WorkflowRule:
    kind: str
    steps: Tuple[StepRule, ...]
    terminal: ElementPattern
    terminal_required: bool = True


@dataclass(frozen=True)
class WorkflowStep:
    parameter: str
    element: ElementRecord


@dataclass(frozen=True)
class WorkflowDescriptor:
    """A recognized multi-step interaction bound to concrete elements."""

    kind: str
    steps: Tuple[WorkflowStep, ...]
    terminal: Optional[ElementRecord] = None

    @property
    def parameters(self) -> Tuple[str, ...]:
        return tuple(step.parameter for step in self.steps)


WORKFLOW_RULES: Tuple[WorkflowRule, ...] = (
    WorkflowRule(
        kind="login",
        steps=(
            StepRule("email", ElementPattern(("name", "id"), ("email",), subtypes=("email",))),
            StepRule("password", ElementPattern(("name", "id"), ("password",), subtypes=("password",))),
        ),
        terminal=ElementPattern(("text",), ("login", "sign in")),
    ),
    WorkflowRule(
        kind="search",
        steps=(StepRule("query", ElementPattern(("placeholder", "name", "id"), ("search",))),),
        terminal=ElementPattern(("text",), ("search",)),
        terminal_required=False,
    ),
)


class WorkflowDetector:
    """Matches a rule table against the elements of a page analysis.

    Rules are evaluated in table order; each step and the terminal element
    bind to the first matching element in element order.
    """

    def __init__(self, rules: Sequence[WorkflowRule] = WORKFLOW_RULES):
        self.rules = tuple(rules)

    def match_rule(self, rule: WorkflowRule, elements: Sequence[ElementRecord]) -> Optional[WorkflowDescriptor]:
        steps = []
        for step_rule in rule.steps:
            element = step_rule.pattern.first_match(elements)
            if element is None:
                return None
            steps.append(WorkflowStep(parameter=step_rule.parameter, element=element))

        terminal = rule.terminal.first_match(elements)
        if terminal is None and rule.terminal_required:
            return None
        return WorkflowDescriptor(kind=rule.kind, steps=tuple(steps), terminal=terminal)

    def detect(self, analysis: PageAnalysis) -> Tuple[WorkflowDescriptor, ...]:
        workflows = []
        for rule in self.rules:
            workflow = self.match_rule(rule, analysis.elements)
            if workflow is not None:
                logging.debug(f"Detected {rule.kind} workflow on {analysis.url}")
                workflows.append(workflow)
        return tuple(workflows)


def detect_workflows(analysis: PageAnalysis) -> Tuple[WorkflowDescriptor, ...]:
    return WorkflowDetector().detect(analysis)
