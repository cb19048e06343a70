#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
=============================================================================
BUILDER - Sestavení XML dokumentu toast notifikace
=============================================================================
Windows popisuje vzhled notifikace XML dokumentem:

    <toast activationType="protocol" launch="..." duration="short">
        <visual>
            <binding template="ToastGeneric">
                <image placement="hero" src="..." />
                <image placement="appLogoOverride" src="..." />
                <text><![CDATA[Nadpis]]></text>
                <text><![CDATA[Zpráva]]></text>
            </binding>
        </visual>
        <audio src="ms-winsoundevent:Notification.Default" loop="false" />
        <actions>
            <action activationType="protocol" content="Tlačítko" arguments="..." />
        </actions>
    </toast>

Dokument renderujeme šablonou jinja2. Každá část se vykreslí jen tehdy,
když je odpovídající pole vyplněné.
=============================================================================
"""

from typing import Optional

from jinja2 import Environment, StrictUndefined, TemplateError
from markupsafe import Markup

from .errors import BuildError
from .notification import Notification


TOAST_XML = """\
<toast activationType="{{ toast.activation_type or '' }}" launch="{{ toast.activation_arguments or '' }}" duration="{{ toast.duration.value }}">
    <visual>
        <binding template="ToastGeneric">
{% if toast.hero_image %}
            <image placement="hero" src="{{ toast.hero_image }}" />
{% endif %}
{% if toast.icon %}
            <image placement="appLogoOverride" src="{{ toast.icon }}" />
{% endif %}
{% if toast.image %}
            <image src="{{ toast.image }}" />
{% endif %}
{% if toast.title %}
            <text>{{ toast.title | cdata }}</text>
{% endif %}
{% if toast.message %}
            <text>{{ toast.message | cdata }}</text>
{% endif %}
{% if toast.attribution %}
            <text placement="attribution">{{ toast.attribution }}</text>
{% endif %}
        </binding>
    </visual>
{% if toast.audio.is_silent %}
    <audio silent="true" />
{% else %}
    <audio src="{{ toast.audio.value }}" loop="{{ 'true' if toast.loop else 'false' }}" />
{% endif %}
{% if toast.actions %}
    <actions>
{% for action in toast.actions %}
        <action activationType="{{ action.type }}" content="{{ action.label }}" arguments="{{ action.arguments }}" />
{% endfor %}
    </actions>
{% endif %}
</toast>
"""


def cdata(text) -> Markup:
    """
    Zabalí text do <![CDATA[...]]>, aby se "<" a "&" neinterpretovaly jako XML.

    "]]>" uvnitř textu by CDATA ukončilo, proto ho rozdělíme do dvou sekcí.
    """
    # Z "]]>" uděláme "]]" + konec CDATA + nové CDATA + ">"
    body = str(text).replace("]]>", "]]]]><![CDATA[>")
    return Markup(f"<![CDATA[{body}]]>")


class ToastTemplate:
    """
    Zkompilovaná šablona toast XML.

    Šablona se zkompiluje jednou v konstruktoru a pak se už nemění,
    takže jednu instanci můžou sdílet všichni volající.

    Použití:
        template = ToastTemplate()
        xml = template.render(notification.with_defaults())
    """

    def __init__(self, source: str = TOAST_XML):
        self._source = source

        # autoescape = hodnoty atributů se escapují (& < > " ')
        # StrictUndefined = chybějící hodnota je chyba, ne prázdný řetězec
        env = Environment(
            autoescape=True,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        # Vlastní filtr, v šabloně: {{ toast.title | cdata }}
        env.filters["cdata"] = cdata

        # Syntaktická chyba v šabloně se projeví hned tady, ne až při renderování
        try:
            self._template = env.from_string(source)
        except TemplateError as e:
            raise BuildError(f"Neplatná šablona toast XML: {e}") from e

    @property
    def source(self) -> str:
        return self._source

    def render(self, notification: Notification) -> str:
        """
        Vyrenderuje notifikaci do XML.

        Výchozí hodnoty se tu nedoplňují - to dělá with_defaults().
        Notifikace bez audio/duration proto skončí chybou BuildError.
        """
        try:
            return self._template.render(toast=notification)
        except TemplateError as e:
            raise BuildError(f"Nelze vyrenderovat toast XML: {e}") from e


def build_xml(notification: Notification, template: Optional[ToastTemplate] = None) -> str:
    """Vyrenderuje notifikaci výchozí (nebo zadanou) šablonou."""
    # Bez šablony zkompilujeme novou - žádný sdílený globální stav
    if template is None:
        template = ToastTemplate()
    return template.render(notification)
