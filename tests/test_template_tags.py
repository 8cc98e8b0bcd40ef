from rental_service.app.services.template_tags import (
    KNOWN_TAGS, TemplateTag, find_unknown_tags, remove_family,
    substitute_conditional, substitute_labelled, substitute_plain)


def test_placeholder():
    assert TemplateTag.OWNER_NAME.placeholder == "{{owner.name}}"
    assert "PAGINA" in KNOWN_TAGS


def test_plain_replaces_every_occurrence():
    text = "a {{owner.name}} b {{owner.name}}"
    assert substitute_plain(text, "owner.name", "Ana") == "a Ana b Ana"


def test_plain_absent_value_is_empty():
    assert substitute_plain("[{{owner.email}}]", "owner.email", None) == "[]"


def test_plain_is_case_sensitive():
    text = "{{Owner.Name}}"
    assert substitute_plain(text, "owner.name", "Ana") == text


def test_conditional_with_value():
    assert substitute_conditional(
        "x {{owner.rg}}", "RG nº:", "owner.rg", "12.345-6") == "x RG nº: 12.345-6"


def test_conditional_without_value_drops_label_too():
    assert substitute_conditional(
        "x{{owner.rg}}", "RG nº:", "owner.rg", "") == "x"
    assert substitute_conditional(
        "x{{owner.rg}}", "RG nº:", "owner.rg", None) == "x"


def test_conditional_does_not_expand_inserted_value():
    assert substitute_conditional(
        "{{owner.rg}}", "RG nº:", "owner.rg", "{{owner.rg}}") == "RG nº: {{owner.rg}}"


def test_labelled_keeps_a_single_label():
    assert substitute_labelled(
        "CPF: {{owner.document}}", "CPF:", "owner.document", "111") == "CPF: 111"
    assert substitute_labelled(
        "CPF:{{owner.document}}", "CPF:", "owner.document", "111") == "CPF: 111"


def test_labelled_removes_label_when_absent():
    assert substitute_labelled(
        "Dados CPF: {{owner.document}}.", "CPF:", "owner.document", None) == "Dados ."


def test_labelled_leaves_bare_tags():
    text = "Doc {{owner.document}}"
    assert substitute_labelled(text, "CPF:", "owner.document", "111") == text


def test_find_unknown_tags_unique_in_order():
    content = "{{foo}} {{owner.name}} {{foo}} {{bar.baz}}"
    assert find_unknown_tags(content) == ["foo", "bar.baz"]
    assert find_unknown_tags("") == []


def test_remove_family():
    text = "A{{guarantor.name}}B{{guarantor.whatever}}C{{tenant.name}}"
    assert remove_family(text, "guarantor") == "ABC{{tenant.name}}"
