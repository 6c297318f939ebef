"""Tests for Page Object and test-suite emission."""

import pytest

from webqa_testgen.crawler.dom_extractor import parse_html
from webqa_testgen.data import ElementRecord, InteractionType, PageAnalysis
from webqa_testgen.generator.emitter import (
    NameRegistry,
    PageObjectEmitter,
    TestSuiteEmitter,
    generate_page_object,
    generate_test_suite,
    page_object_filename,
    test_suite_filename as suite_filename,
)


def button(text: str, selector: str) -> ElementRecord:
    return ElementRecord(selector=selector, tag="button", text=text, interaction_type=InteractionType.CLICK)


class TestNameRegistry:
    def test_collisions_get_numeric_suffixes(self) -> None:
        names = NameRegistry([button("Submit", "a"), button("Submit", "b"), button("Submit", "c")])
        assert [e.name for e in names] == ["submit", "submit2", "submit3"]

    def test_resolves_form_field_to_element(self, login_analysis) -> None:
        names = NameRegistry(login_analysis.elements)
        field = login_analysis.forms[0].fields[0]
        assert field is not login_analysis.elements[1]
        assert names.resolve(field).name == "email"

    def test_forms_sharing_a_selector_resolve_to_their_own_fields(self) -> None:
        html = "<form><input name='email'></form><form><input name='email'></form>"
        source = generate_page_object(parse_html(html, "https://x.test/", "t"))
        assert "fillForm1(data: any): void {\n    this.typeEmail(data.email);\n  }" in source
        assert "fillForm2(data: any): void {\n    this.typeEmail2(data.email2);\n  }" in source

    def test_fields_sharing_a_selector_in_one_form(self) -> None:
        html = "<form><input class='field'><input class='field'></form>"
        source = generate_page_object(parse_html(html, "https://x.test/", "t"))
        assert (
            "    this.typeInputTextElement(data.inputTextElement);\n"
            "    this.typeInputTextElement2(data.inputTextElement2);\n"
        ) in source


class TestPageObject:
    def test_login_page_object(self, login_analysis) -> None:
        source = generate_page_object(login_analysis)
        assert "export class LoginPage {" in source
        assert "private readonly url = 'https://x.test/login';" in source
        assert "private readonly emailSelector = '#email';" in source
        assert "private readonly passwordSelector = '#password';" in source
        assert "private readonly signInSelector = 'button:contains(\"Sign In\")';" in source
        assert "  login(email: string, password: string): void {\n" in source
        assert "    this.typeEmail(email);\n    this.typePassword(password);\n    this.clickSignIn();\n" in source

    def test_interaction_methods_by_category(self, login_analysis) -> None:
        source = generate_page_object(login_analysis)
        assert "clickSignIn(): void {" in source
        assert "typeEmail(text: string): void {" in source
        assert "clearPassword(): void {" in source
        assert "clickHome" not in source
        assert "getHome(): Cypress.Chainable {" in source

    def test_form_methods(self, login_analysis) -> None:
        source = generate_page_object(login_analysis)
        assert "fillForm1(data: any): void {\n    this.typeEmail(data.email);\n    this.typePassword(data.password);\n  }" in source
        assert "// No submit button found" in source

    def test_search_without_button_presses_enter(self, search_analysis) -> None:
        source = generate_page_object(search_analysis)
        assert "search(query: string): void {" in source
        assert "this.typeQ(query);" in source
        assert "cy.get(this.qSelector).type('{enter}');" in source

    def test_literals_are_escaped(self) -> None:
        analysis = PageAnalysis(
            url="https://x.test/o'brien",
            title="It's here",
            elements=(button("Don't", "button:contains(\"Don't\")"),),
        )
        source = generate_page_object(analysis)
        assert "private readonly url = 'https://x.test/o\\'brien';" in source
        assert "cy.title().should('contain', 'It\\'s here');" in source
        assert "'button:contains(\"Don\\'t\")'" in source

    def test_idempotent(self, login_analysis) -> None:
        assert generate_page_object(login_analysis) == generate_page_object(login_analysis)

    def test_ends_with_newline(self, login_analysis) -> None:
        assert generate_page_object(login_analysis).endswith("}\n")

    def test_empty_page(self) -> None:
        source = generate_page_object(PageAnalysis(url="::bad::", title=""))
        assert "export class PagePage {" in source
        assert "cy.url().should('include', '/');" in source

    def test_filenames(self) -> None:
        url = "https://x.test/account/settings"
        assert page_object_filename(url) == "SettingsPage.ts"
        assert suite_filename(url) == "Settings.spec.ts"
        assert PageObjectEmitter().filename(url) == "SettingsPage.ts"


class TestTestSuite:
    def test_skeleton(self, login_analysis) -> None:
        source = generate_test_suite(login_analysis)
        assert "import { LoginPage } from '../page-objects/LoginPage';" in source
        assert "describe('Sign in to Example', () => {" in source
        assert "page = new LoginPage();" in source
        assert source.endswith("});\n")

    def test_section_order(self, login_analysis) -> None:
        source = generate_test_suite(login_analysis)
        titles = [
            "Page Load Tests",
            "Element Interaction Tests",
            "Form Tests",
            "Navigation Tests",
            "Accessibility Tests",
            "Error Handling Tests",
            "Performance Tests",
            "Responsive Design Tests",
        ]
        positions = [source.index(f"describe('{title}'") for title in titles]
        assert positions == sorted(positions)

    def test_interaction_tests_grouped_by_category(self, login_analysis) -> None:
        source = generate_test_suite(login_analysis)
        assert source.index("should be able to click signIn") < source.index("should be able to type in email")
        assert "should be able to click home" not in source

    def test_form_test_data(self, login_analysis) -> None:
        source = generate_test_suite(login_analysis)
        assert "        email: 'test email',\n        password: 'test password'\n      };" in source
        assert "page.fillForm1(testData);" in source
        assert "page.submitForm1();" in source

    def test_form_test_data_keys_are_unique(self) -> None:
        html = "<form><input class='field'><input class='field'></form>"
        source = generate_test_suite(parse_html(html, "https://x.test/", "t"))
        assert (
            "        inputTextElement: 'test inputTextElement',\n"
            "        inputTextElement2: 'test inputTextElement2'\n"
        ) in source

    def test_idempotent(self, login_analysis) -> None:
        assert generate_test_suite(login_analysis) == generate_test_suite(login_analysis)

    def test_navigation_capped_at_five(self) -> None:
        links = "".join(f"<a href='/p{i}'>Link {i}</a>" for i in range(8))
        analysis = parse_html(f"<nav>{links}</nav>", "https://x.test/", "Home")
        source = generate_test_suite(analysis)
        assert "clicking navigation item 5'" in source
        assert "clicking navigation item 6'" not in source

    def test_visibility_capped_at_ten(self) -> None:
        buttons = "".join(f"<button>Action {i}</button>" for i in range(12))
        source = generate_test_suite(parse_html(buttons, "https://x.test/", "t"))
        assert "page.getAction9().should('be.visible');" in source
        assert "page.getAction10().should('be.visible');" not in source

    def test_keyboard_checks_capped_at_five(self) -> None:
        buttons = "".join(f"<button>Action {i}</button>" for i in range(7))
        source = generate_test_suite(parse_html(buttons, "https://x.test/", "t"))
        assert source.count(".focus().should('be.focused');") == 5

    def test_fixed_sections(self, login_analysis) -> None:
        source = generate_test_suite(login_analysis)
        assert "expect(loadTime).to.be.lessThan(5000);" in source
        assert "['iphone-6', 'ipad-2', [1920, 1080]].forEach" in source
        assert "cy.injectAxe();" in source
        assert "should handle form validation errors" in source
        assert "forceNetworkError: true" in source

    def test_no_validation_test_without_forms(self) -> None:
        source = generate_test_suite(parse_html("<button>Go</button>", "https://x.test/", "t"))
        assert "should handle form validation errors" not in source
        assert "should handle network errors gracefully" in source

    def test_render_single_section(self, login_analysis) -> None:
        emitter = TestSuiteEmitter()
        section = emitter.render_section("performance", login_analysis)
        assert section.startswith("  describe('Performance Tests'")
        with pytest.raises(KeyError):
            emitter.render_section("unknown", login_analysis)

    def test_explicit_empty_workflows(self, login_analysis) -> None:
        source = PageObjectEmitter().emit(login_analysis, workflows=())
        assert "login(" not in source
