from .emitter import (
    NameRegistry,
    PageObjectEmitter,
    TestSuiteEmitter,
    generate_page_object,
    generate_test_suite,
    page_object_filename,
    test_suite_filename,
)
from .naming import element_name, page_name, to_camel_case, to_pascal_case
from .workflows import WORKFLOW_RULES, WorkflowDescriptor, WorkflowDetector, detect_workflows

__all__ = [
    "NameRegistry",
    "PageObjectEmitter",
    "TestSuiteEmitter",
    "generate_page_object",
    "generate_test_suite",
    "page_object_filename",
    "test_suite_filename",
    "element_name",
    "page_name",
    "to_camel_case",
    "to_pascal_case",
    "WORKFLOW_RULES",
    "WorkflowDescriptor",
    "WorkflowDetector",
    "detect_workflows",
]
