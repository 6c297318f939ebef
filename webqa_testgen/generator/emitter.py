import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from jinja2 import Environment

from webqa_testgen.data.page_structures import ElementRecord, FormRecord, InteractionType, PageAnalysis
from webqa_testgen.generator.naming import element_name, page_class_stem, page_path, to_pascal_case
from webqa_testgen.generator.templates import build_environment
from webqa_testgen.generator.workflows import WorkflowDescriptor, detect_workflows

PAGE_OBJECT_SUFFIX = "Page"
SOURCE_EXTENSION = "ts"
TEST_EXTENSION = "spec.ts"

# Caps on repeated test-suite sections.
VISIBILITY_LIMIT = 10
NAVIGATION_LIMIT = 5
KEYBOARD_LIMIT = 5
MAX_LOAD_TIME_MS = 5000
RESPONSIVE_VIEWPORTS: Tuple[object, ...] = ("iphone-6", "ipad-2", (1920, 1080))

ACTIONABLE_TYPES = (InteractionType.CLICK, InteractionType.INPUT, InteractionType.SELECT)


@dataclass(frozen=True)
class NamedElement:
    element: ElementRecord
    name: str

    @property
    def pascal(self) -> str:
        return to_pascal_case(self.name)

    @property
    def interaction_type(self) -> InteractionType:
        return self.element.interaction_type


class NameRegistry:
    """Assigns every element of an analysis a unique identifier.

    Names come from :func:`element_name`; a name that is already taken gets the
    smallest free numeric suffix starting at 2, in element order.
    """

    def __init__(self, elements: Sequence[ElementRecord]):
        self.entries: List[NamedElement] = []
        used = set()
        for element in elements:
            base = element_name(element)
            name, n = base, 1
            while name in used:
                n += 1
                name = f"{base}{n}"
            used.add(name)
            self.entries.append(NamedElement(element=element, name=name))
        self._by_position: Dict[int, NamedElement] = {
            e.element.position: e for e in self.entries if e.element.position is not None
        }

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def resolve(self, element: ElementRecord) -> NamedElement:
        """Find the registered entry for ``element``.

        Form fields are separate records of the same DOM nodes, so they are
        matched on the document position they share with their element.
        """
        for entry in self.entries:
            if entry.element is element:
                return entry
        if element.position is not None and element.position in self._by_position:
            return self._by_position[element.position]
        return NamedElement(element=element, name=element_name(element))


@dataclass(frozen=True)
class Section:
    name: str
    text: str


@dataclass
class EmissionContext:
    analysis: PageAnalysis
    workflows: Tuple[WorkflowDescriptor, ...]
    names: NameRegistry
    class_name: str

    @property
    def page_path(self) -> str:
        return page_path(self.analysis.url)

    def base_vars(self) -> Dict[str, object]:
        return {
            "url": self.analysis.url,
            "title": self.analysis.title,
            "class_name": self.class_name,
            "page_path": self.page_path,
        }


def form_name(index: int) -> str:
    return f"Form{index + 1}"


def form_inputs(names: NameRegistry, form: FormRecord) -> List[NamedElement]:
    entries = [names.resolve(field) for field in form.fields]
    return [e for e in entries if e.interaction_type == InteractionType.INPUT]


def submit_field(form: FormRecord) -> Optional[ElementRecord]:
    for field in form.fields:
        if field.type == "submit" or (field.tag == "button" and field.interaction_type == InteractionType.CLICK):
            return field
    return None


def page_object_class_name(url: str) -> str:
    return f"{page_class_stem(url)}{PAGE_OBJECT_SUFFIX}"


def page_object_filename(url: str) -> str:
    return f"{page_object_class_name(url)}.{SOURCE_EXTENSION}"


def test_suite_filename(url: str) -> str:
    return f"{page_class_stem(url)}.{TEST_EXTENSION}"


class ArtifactEmitter(ABC):
    """Renders one artifact as an ordered list of named sections.

    Each section is produced independently from the analysis and then placed
    into the artifact's skeleton template.
    """

    skeleton: str = ""
    section_names: Tuple[str, ...] = ()

    def __init__(self, env: Optional[Environment] = None):
        self.env = env or build_environment()

    def render(self, template: str, **variables) -> str:
        return self.env.get_template(template).render(**variables)

    def join(self, template: str, items: Sequence[Dict[str, object]], separator: str = "\n\n") -> str:
        return separator.join(self.render(template, **item) for item in items)

    def build_context(
        self, analysis: PageAnalysis, workflows: Optional[Sequence[WorkflowDescriptor]] = None
    ) -> EmissionContext:
        if workflows is None:
            workflows = detect_workflows(analysis)
        return EmissionContext(
            analysis=analysis,
            workflows=tuple(workflows),
            names=NameRegistry(analysis.elements),
            class_name=page_object_class_name(analysis.url),
        )

    def sections(self, ctx: EmissionContext) -> List[Section]:
        return [Section(name=name, text=getattr(self, f"section_{name}")(ctx)) for name in self.section_names]

    def render_section(
        self, name: str, analysis: PageAnalysis, workflows: Optional[Sequence[WorkflowDescriptor]] = None
    ) -> str:
        if name not in self.section_names:
            raise KeyError(f"Unknown section: {name}")
        return getattr(self, f"section_{name}")(self.build_context(analysis, workflows))

    def emit(self, analysis: PageAnalysis, workflows: Optional[Sequence[WorkflowDescriptor]] = None) -> str:
        ctx = self.build_context(analysis, workflows)
        sections = {section.name: section.text for section in self.sections(ctx)}
        logging.debug(f"{type(self).__name__} rendered sections: {', '.join(sections)}")
        return self.render(self.skeleton, sections=sections, **ctx.base_vars())

    @abstractmethod
    def filename(self, url: str) -> str:
        pass


class PageObjectEmitter(ArtifactEmitter):
    """Generates the Cypress Page Object class for a page."""

    skeleton = "page_object"
    section_names = ("locators", "getters", "interactions", "forms", "workflows")

    def filename(self, url: str) -> str:
        return page_object_filename(url)

    def section_locators(self, ctx: EmissionContext) -> str:
        items = [{"name": e.name, "selector": e.element.selector} for e in ctx.names]
        return self.join("locator", items, separator="\n")

    def section_getters(self, ctx: EmissionContext) -> str:
        return self.join("getter", [{"name": e.name, "pascal": e.pascal} for e in ctx.names])

    def section_interactions(self, ctx: EmissionContext) -> str:
        templates = {
            InteractionType.CLICK: "click_method",
            InteractionType.INPUT: "input_method",
            InteractionType.SELECT: "select_method",
        }
        methods = [
            self.render(templates[e.interaction_type], pascal=e.pascal)
            for e in ctx.names
            if e.interaction_type in templates
        ]
        return "\n\n".join(methods)

    def section_forms(self, ctx: EmissionContext) -> str:
        methods = []
        for index, form in enumerate(ctx.analysis.forms):
            input_fields = form_inputs(ctx.names, form)
            submit = submit_field(form)
            methods.append(
                self.render(
                    "form_methods",
                    form_name=form_name(index),
                    input_fields=input_fields,
                    submit=ctx.names.resolve(submit) if submit is not None else None,
                )
            )
        return "\n\n".join(methods)

    def workflow_statements(self, ctx: EmissionContext, workflow: WorkflowDescriptor) -> List[str]:
        statements = []
        for step in workflow.steps:
            entry = ctx.names.resolve(step.element)
            if entry.interaction_type == InteractionType.INPUT:
                statements.append(f"this.type{entry.pascal}({step.parameter});")
            else:
                statements.append(f"this.get{entry.pascal}().clear().type({step.parameter});")

        if workflow.terminal is not None:
            entry = ctx.names.resolve(workflow.terminal)
            if entry.interaction_type == InteractionType.CLICK:
                statements.append(f"this.click{entry.pascal}();")
            else:
                statements.append(f"this.get{entry.pascal}().click();")
        elif workflow.steps:
            # No submit control: press Enter in the last field.
            entry = ctx.names.resolve(workflow.steps[-1].element)
            statements.append(f"cy.get(this.{entry.name}Selector).type('{{enter}}');")
        return statements

    def section_workflows(self, ctx: EmissionContext) -> str:
        methods = [
            self.render(
                "workflow_method",
                kind=workflow.kind,
                parameters=list(workflow.parameters),
                statements=self.workflow_statements(ctx, workflow),
            )
            for workflow in ctx.workflows
        ]
        return "\n\n".join(methods)


class TestSuiteEmitter(ArtifactEmitter):
    """Generates the Cypress test file exercising the generated Page Object."""

    __test__ = False  # not a pytest test class

    skeleton = "test_suite"
    section_names = (
        "page_load",
        "interactions",
        "forms",
        "navigation",
        "accessibility",
        "error_handling",
        "performance",
        "responsive",
    )

    def filename(self, url: str) -> str:
        return test_suite_filename(url)

    def describe(self, title: str, body: str) -> str:
        return self.render("describe_block", title=title, body=body)

    def section_page_load(self, ctx: EmissionContext) -> str:
        visible = [e.pascal for e in list(ctx.names)[:VISIBILITY_LIMIT]]
        return self.render("page_load_tests", visible=visible, **ctx.base_vars())

    def section_interactions(self, ctx: EmissionContext) -> str:
        templates = {
            InteractionType.CLICK: "click_test",
            InteractionType.INPUT: "input_test",
            InteractionType.SELECT: "select_test",
        }
        tests = [
            self.render(templates[kind], name=e.name, pascal=e.pascal)
            for kind in ACTIONABLE_TYPES
            for e in ctx.names
            if e.interaction_type == kind
        ]
        return self.describe("Element Interaction Tests", "\n\n".join(tests))

    def section_forms(self, ctx: EmissionContext) -> str:
        tests = []
        for index, form in enumerate(ctx.analysis.forms):
            input_fields = form_inputs(ctx.names, form)
            tests.append(self.render("form_test", form_name=form_name(index), input_fields=input_fields))
        return self.describe("Form Tests", "\n\n".join(tests))

    def section_navigation(self, ctx: EmissionContext) -> str:
        items = [
            {"index": i + 1, "selector": nav.selector}
            for i, nav in enumerate(ctx.analysis.navigation[:NAVIGATION_LIMIT])
        ]
        return self.describe("Navigation Tests", self.join("navigation_test", items))

    def section_accessibility(self, ctx: EmissionContext) -> str:
        focusable = [
            e.pascal for e in ctx.names if e.interaction_type in (InteractionType.CLICK, InteractionType.INPUT)
        ][:KEYBOARD_LIMIT]
        return self.render("accessibility_tests", focusable=focusable)

    def section_error_handling(self, ctx: EmissionContext) -> str:
        tests = []
        if ctx.analysis.forms:
            tests.append(self.render("validation_error_test", form_name=form_name(0)))
        tests.append(self.render("network_error_test"))
        return self.describe("Error Handling Tests", "\n\n".join(tests))

    def section_performance(self, ctx: EmissionContext) -> str:
        return self.render("performance_tests", max_load_ms=MAX_LOAD_TIME_MS)

    def section_responsive(self, ctx: EmissionContext) -> str:
        viewports = []
        for viewport in RESPONSIVE_VIEWPORTS:
            if isinstance(viewport, tuple):
                viewports.append(f"[{', '.join(str(v) for v in viewport)}]")
            else:
                viewports.append(f"'{viewport}'")
        return self.render("responsive_tests", viewports=viewports)


def generate_page_object(analysis: PageAnalysis, workflows: Optional[Sequence[WorkflowDescriptor]] = None) -> str:
    return PageObjectEmitter().emit(analysis, workflows)


def generate_test_suite(analysis: PageAnalysis, workflows: Optional[Sequence[WorkflowDescriptor]] = None) -> str:
    return TestSuiteEmitter().emit(analysis, workflows)
