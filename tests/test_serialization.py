"""Tests for the serialization view."""

import pytest

from formforge import Form


def _form(*fields, **options):
    return Form({"groups": [{"fields": list(fields)}], **options})


def _field(view, index=0, group=0):
    return view["groups"][group]["fields"][index]


class TestFormMetadata:
    def test_metadata_and_defaults(self):
        view = Form({"id": "signup", "action": "/signup", "helpHtml": "<b>x</b>"}).serialize()
        assert view["id"] == "signup"
        assert view["action"] == "/signup"
        assert view["method"] == "post"
        assert view["submit"] == "Submit"
        assert view["helpHtml"] == "<b>x</b>"
        assert view["groups"] == []
        assert view["hasRequiredFields"] is False

    def test_extend_merged(self):
        view = _form({"name": "a"}).serialize(extend={"error": "Oops", "submit": "Go"})
        assert view["error"] == "Oops"
        assert view["submit"] == "Go"

    def test_extra_attributes_passed_through(self):
        view = Form({"theme": "dark"}).serialize()
        assert view["theme"] == "dark"


class TestGroups:
    def test_group_name_defaults_to_index(self):
        form = Form({
            "groups": [
                {"name": "account", "fields": [{"name": "a"}]},
                {"fields": [{"name": "b"}]},
            ]
        })
        view = form.serialize()
        assert [g["name"] for g in view["groups"]] == ["account", "group-1"]
        assert form.options.groups[1].name is None

    def test_inputs_alias(self):
        view = _form({"name": "a"}).serialize()
        group = view["groups"][0]
        assert group["inputs"] is group["fields"]

    def test_group_attributes(self):
        form = Form({"groups": [{"name": "g", "legend": "Account", "fields": []}]})
        assert form.serialize()["groups"][0]["legend"] == "Account"


class TestValueResolution:
    def test_explicit_value_over_default(self):
        view = _form({"name": "a", "default": "d"}).serialize(values={"a": "v"})
        assert _field(view)["value"] == "v"

    @pytest.mark.parametrize("value", ["", 0, False])
    def test_falsy_explicit_value_kept(self, value):
        view = _form({"name": "a", "default": "d"}).serialize(values={"a": value})
        assert _field(view)["value"] == value

    def test_none_falls_back_to_default(self):
        view = _form({"name": "a", "default": "d"}).serialize(values={"a": None})
        assert _field(view)["value"] == "d"

    def test_missing_falls_back_to_default(self):
        view = _form({"name": "a", "default": "d"}).serialize()
        assert _field(view)["value"] == "d"

    def test_no_value_no_default(self):
        view = _form({"name": "a"}).serialize()
        assert _field(view)["value"] is None


class TestFieldTypes:
    def test_checkbox_checked(self):
        form = _form({"name": "agree", "type": "checkbox"})
        assert _field(form.serialize(values={"agree": "on"}))["checked"] is True
        assert _field(form.serialize(values={"agree": ""}))["checked"] is False
        assert _field(form.serialize())["checked"] is False

    def test_checkbox_default(self):
        form = _form({"name": "agree", "type": "checkbox", "default": True})
        assert _field(form.serialize())["checked"] is True

    def test_select_flags(self):
        options = [{"key": "admin", "label": "Admin"}, {"key": "user", "label": "User"}]
        form = _form({"name": "role", "type": "select", "options": options})
        field = _field(form.serialize(values={"role": "user"}))
        assert field["options"] == [
            {"key": "admin", "label": "Admin", "selected": False},
            {"key": "user", "label": "User", "selected": True},
        ]

    def test_select_does_not_mutate_definition(self):
        options = [{"key": "admin"}, {"key": "user"}]
        form = _form({"name": "role", "type": "select", "options": options})
        first = form.serialize(values={"role": "admin"})
        second = form.serialize(values={"role": "user"})
        assert options == [{"key": "admin"}, {"key": "user"}]
        assert _field(first)["options"][0]["selected"] is True
        assert _field(second)["options"][0]["selected"] is False

    def test_select_callable_options(self):
        form = _form({"name": "role", "type": "select", "options": lambda: [{"key": "x"}]})
        assert _field(form.serialize(values={"role": "x"}))["options"] == [
            {"key": "x", "selected": True}
        ]

    def test_select_without_options(self):
        form = _form({"name": "role", "type": "select"})
        assert _field(form.serialize())["options"] == []

    def test_select_skips_non_mapping_options(self):
        form = _form({"name": "role", "type": "select", "options": ["admin", {"key": "user"}, None]})
        assert _field(form.serialize(values={"role": "user"}))["options"] == [
            {"key": "user", "selected": True}
        ]

    def test_text_has_no_type_flags(self):
        field = _field(_form({"name": "a"}).serialize(values={"a": "x"}))
        assert "checked" not in field
        assert "selected" not in field


class TestFieldDisplay:
    def test_generated_id(self):
        form = Form({"groups": [{"name": "account", "fields": [{"name": "email"}]}]})
        assert _field(form.serialize())["id"] == "form-account-email"

    def test_generated_id_uses_default_group_name(self):
        assert _field(_form({"name": "email"}).serialize())["id"] == "form-group-0-email"

    def test_explicit_id(self):
        assert _field(_form({"name": "email", "id": "my-email"}).serialize())["id"] == "my-email"

    @pytest.mark.parametrize("visible, expected", [(None, True), (True, True), (False, False)])
    def test_visible(self, visible, expected):
        spec = {"name": "a"}
        if visible is not None:
            spec["visible"] = visible
        assert _field(_form(spec).serialize())["visible"] is expected

    def test_descriptions_evaluated_with_values(self):
        form = _form({
            "name": "plan",
            "description": lambda values: f"Current plan: {values.get('plan')}",
            "descriptionHtml": lambda values: f"<b>{values.get('plan')}</b>",
        })
        field = _field(form.serialize(values={"plan": "pro"}))
        assert field["description"] == "Current plan: pro"
        assert field["descriptionHtml"] == "<b>pro</b>"

    def test_static_description(self):
        field = _field(_form({"name": "a", "description": "Plain"}).serialize())
        assert field["description"] == "Plain"
        assert field["descriptionHtml"] is None

    def test_label_and_attributes(self):
        field = _field(_form({"name": "a", "label": "A", "placeholder": "type"}).serialize())
        assert field["label"] == "A"
        assert field["placeholder"] == "type"

    def test_label_defaults_to_name(self):
        assert _field(_form({"name": "a"}).serialize())["label"] == "a"


class TestHasRequiredFields:
    def test_literal_true(self):
        form = Form({
            "groups": [
                {"fields": [{"name": "a"}]},
                {"fields": [{"name": "b", "required": True}]},
            ]
        })
        assert form.serialize()["hasRequiredFields"] is True

    def test_predicate_not_evaluated(self):
        calls = []

        def always(payload):
            calls.append(payload)
            return True

        form = _form({"name": "a", "required": always})
        assert form.serialize()["hasRequiredFields"] is False
        assert calls == []

    def test_none_required(self):
        assert _form({"name": "a"}).serialize()["hasRequiredFields"] is False
