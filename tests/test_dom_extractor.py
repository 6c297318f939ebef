"""Tests for DOM extraction into a PageAnalysis."""

import json

from webqa_testgen.crawler.dom_extractor import parse_html
from webqa_testgen.data import InteractionType


class TestInteractiveElements:
    def test_grouped_order(self, login_analysis) -> None:
        tags = [e.tag for e in login_analysis.elements]
        assert tags == ["button", "input", "input", "a", "a", "a", "a", "img"]

    def test_clickable_record(self, login_analysis) -> None:
        button = login_analysis.elements[0]
        assert button.selector == 'button:contains("Sign In")'
        assert button.text == "Sign In"
        assert button.interaction_type == InteractionType.CLICK

    def test_form_controls(self, login_analysis) -> None:
        email, password = login_analysis.elements[1:3]
        assert email.selector == "#email"
        assert email.type == "email"
        assert email.placeholder == "Email address"
        assert email.interaction_type == InteractionType.INPUT
        assert password.selector == "#password"
        assert password.type == "password"

    def test_anchor_and_media(self, login_analysis) -> None:
        home = login_analysis.elements[3]
        assert home.href == "/"
        assert home.interaction_type == InteractionType.NAVIGATE
        img = login_analysis.elements[-1]
        assert img.src == "/logo.png"
        assert img.aria_label == "Example logo"
        assert img.interaction_type == InteractionType.MEDIA

    def test_control_type_defaults_to_text(self) -> None:
        analysis = parse_html("<textarea name='bio'></textarea>", "https://x.test/", "t")
        assert analysis.elements[0].type == "text"

    def test_submit_input_and_select_categories(self) -> None:
        html = "<input type='submit' value='Go'><select name='size'><option>S</option></select>"
        analysis = parse_html(html, "https://x.test/", "t")
        assert [e.interaction_type for e in analysis.elements] == [InteractionType.CLICK, InteractionType.SELECT]

    def test_node_appears_once(self) -> None:
        html = "<a href='/x' class='btn' role='button'>Go</a><button class='btn'>Ok</button>"
        analysis = parse_html(html, "https://x.test/", "t")
        assert [e.tag for e in analysis.elements] == ["button", "a"]


class TestForms:
    def test_login_form(self, login_analysis) -> None:
        (form,) = login_analysis.forms
        assert form.selector == "#login-form"
        assert form.method == "post"
        assert form.action == "/session"
        assert [f.selector for f in form.fields] == ["#email", "#password"]

    def test_submit_button_is_a_field(self) -> None:
        html = "<form><input name='q'><button type='submit'>Go</button><button>Cancel</button></form>"
        (form,) = parse_html(html, "https://x.test/", "t").forms
        assert [f.tag for f in form.fields] == ["input", "button"]
        assert form.fields[1].interaction_type == InteractionType.CLICK

    def test_fields_share_position_with_their_elements(self) -> None:
        html = "<form><input name='email'></form><form><input name='email'></form>"
        analysis = parse_html(html, "https://x.test/", "t")
        fields = [form.fields[0] for form in analysis.forms]
        assert [f.position for f in fields] == [e.position for e in analysis.elements]
        assert fields[0].position != fields[1].position


class TestNavigation:
    def test_links_inside_nav_containers(self, login_analysis) -> None:
        assert [(n.href, n.text) for n in login_analysis.navigation] == [("/", "Home"), ("/pricing", "Pricing")]

    def test_menu_class_container(self) -> None:
        html = "<ul class='menu'><li><a href='/a'>A</a></li></ul><a href='/b'>B</a>"
        analysis = parse_html(html, "https://x.test/", "t")
        assert [n.href for n in analysis.navigation] == ["/a"]


class TestSerialization:
    def test_json_uses_camel_case_and_omits_absent_fields(self, login_analysis) -> None:
        data = json.loads(login_analysis.to_json())
        assert data["url"] == "https://x.test/login"
        email = data["elements"][1]
        assert email["interactionType"] == "input"
        assert "className" not in email
        assert "position" not in email
        assert data["forms"][0]["fields"][0]["selector"] == "#email"
