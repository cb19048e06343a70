"""Tests for toast XML rendering."""

import xml.etree.ElementTree as ET

import pytest

from win_toast.builder import ToastTemplate, build_xml, cdata
from win_toast.errors import BuildError
from win_toast.notification import Action, Audio, Duration, Notification, with_defaults


def _render(**fields):
    return build_xml(with_defaults(Notification(**fields)))


def _texts(root):
    return [node.text for node in root.iter("text")]


def test_minimal_notification_document():
    xml = _render(app_id="Acme", title="Hello", message="World")
    root = ET.fromstring(xml)

    assert root.tag == "toast"
    assert root.attrib == {"activationType": "protocol", "launch": "", "duration": "short"}
    assert _texts(root) == ["Hello", "World"]

    audio = root.find("audio")
    assert audio.attrib == {"src": "ms-winsoundevent:Notification.Default", "loop": "false"}
    assert root.find("actions") is None


def test_empty_sections_are_omitted():
    root = ET.fromstring(_render())
    binding = root.find("visual/binding")

    assert binding.attrib == {"template": "ToastGeneric"}
    assert list(binding) == []


def test_visual_children_order():
    xml = _render(
        title="T",
        message="M",
        attribution="via SMS",
        icon="C:/icon.png",
        hero_image="C:/hero.png",
        image="https://example.com/pic.png",
    )
    binding = ET.fromstring(xml).find("visual/binding")
    children = [(child.tag, child.get("placement")) for child in binding]

    assert children == [
        ("image", "hero"),
        ("image", "appLogoOverride"),
        ("image", None),
        ("text", None),
        ("text", None),
        ("text", "attribution"),
    ]
    assert binding[0].get("src") == "C:/hero.png"
    assert binding[1].get("src") == "C:/icon.png"
    assert binding[2].get("src") == "https://example.com/pic.png"
    assert binding[5].text == "via SMS"


def test_root_attributes_are_escaped():
    xml = _render(activation_arguments='https://example.com/?a=1&b="2"', duration=Duration.LONG)
    root = ET.fromstring(xml)

    assert root.get("launch") == 'https://example.com/?a=1&b="2"'
    assert root.get("duration") == "long"


def test_title_is_wrapped_in_cdata():
    xml = _render(title="<script>", message="a & b")

    assert "<![CDATA[<script>]]>" in xml
    assert "<![CDATA[a & b]]>" in xml
    root = ET.fromstring(xml)
    assert root.find("script") is None
    assert _texts(root) == ["<script>", "a & b"]


def test_cdata_terminator_cannot_escape_span():
    xml = _render(title="x]]><evil/>")
    root = ET.fromstring(xml)

    assert root.find(".//evil") is None
    assert _texts(root) == ["x]]><evil/>"]


def test_cdata_filter():
    assert str(cdata("a]]>b")) == "<![CDATA[a]]]]><![CDATA[>b]]>"


def test_attribution_is_escaped():
    root = ET.fromstring(_render(attribution="<b>me</b>"))

    assert _texts(root) == ["<b>me</b>"]


def test_silent_audio_ignores_loop():
    xml = _render(title="quiet", audio=Audio.SILENT, loop=True)
    audio = ET.fromstring(xml).find("audio")

    assert audio.attrib == {"silent": "true"}
    assert "src=" not in xml.split("<audio", 1)[1].split("/>", 1)[0]


def test_looping_audio():
    audio = ET.fromstring(_render(audio=Audio.LOOPING_ALARM_3, loop=True)).find("audio")

    assert audio.attrib == {"src": "ms-winsoundevent:Notification.Looping.Alarm3", "loop": "true"}


def test_actions_render_in_order():
    actions = [
        Action("protocol", "Open Maps", "bingmaps:?q=sushi"),
        Action("protocol", "Search", "https://example.com/?q=a&b"),
        Action("protocol", "Open Maps", "bingmaps:?q=sushi"),
    ]
    root = ET.fromstring(_render(actions=actions))
    entries = root.findall("actions/action")

    assert [(e.get("activationType"), e.get("content"), e.get("arguments")) for e in entries] == [
        (a.type, a.label, a.arguments) for a in actions
    ]


def test_render_without_defaults_is_build_error():
    with pytest.raises(BuildError):
        build_xml(Notification(title="no defaults"))


def test_alternate_template():
    template = ToastTemplate("<toast>{{ toast.title | cdata }}</toast>")

    assert template.render(Notification(title="Hi")) == "<toast><![CDATA[Hi]]></toast>"
    assert template.source.startswith("<toast>")


def test_invalid_template_source_is_build_error():
    with pytest.raises(BuildError):
        ToastTemplate("{% if %}")


def test_action_with_none_fields_renders_empty_attributes():
    xml = _render(actions=[Action(None, None, None)])
    entry = ET.fromstring(xml).find("actions/action")

    assert "None" not in xml
    assert entry.attrib == {"activationType": "", "content": "", "arguments": ""}


def test_empty_audio_string_renders_default_sound():
    audio = ET.fromstring(_render(audio="")).find("audio")

    assert audio.get("src") == Audio.DEFAULT.value
