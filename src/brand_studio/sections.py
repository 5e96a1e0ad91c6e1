from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Field:
    id: str
    label: str
    placeholder: str
    type: str  # textarea|visual
    is_generated: bool = False


@dataclass(frozen=True)
class Section:
    id: str
    title: str
    description: str
    fields: tuple[Field, ...]


SECTIONS: tuple[Section, ...] = (
    Section(
        id="identity",
        title="I. Fundamentos e Identidad de Marca",
        description='Define el alma de tu marca: tu "qué" y tu "por qué".',
        fields=(
            Field("purpose", "Propósito y Misión", "¿Por qué existes y qué haces?", "textarea"),
            Field("vision", "Visión", "¿Dónde quieres estar en el futuro?", "textarea"),
            Field("values", "Valores Centrales", "Principios éticos que guían tu comportamiento.", "textarea"),
            Field("targetAudience", "Público Objetivo (Buyer Persona)", "Define a quién quieres servir.", "textarea"),
            Field("brandPromise", "Promesa de Marca (PVU)", "¿Qué beneficio único ofreces?", "textarea", True),
        ),
    ),
    Section(
        id="positioning",
        title="II. Posicionamiento y Diferenciación",
        description="Define el lugar que ocuparás en la mente de tu audiencia.",
        fields=(
            Field("competitorAnalysis", "Análisis Competitivo", "Investiga a tus competidores.", "textarea"),
            Field("positioning", "Posicionamiento de Marca", "¿Cómo quieres ser percibido?", "textarea", True),
            Field("toneOfVoice", "Tono de Voz", "Formal, divertido, técnico, etc.", "textarea", True),
            Field("brandArchetype", "Arquetipo de Marca", "El Sabio, El Héroe, El Creador, etc.", "textarea", True),
        ),
    ),
    Section(
        id="visual",
        title="III. Identidad Visual",
        description='Crea la "cara" de tu marca, la primera impresión tangible.',
        fields=(Field("visualIdentity", "Identidad Visual", "", "visual", True),),
    ),
    Section(
        id="communication",
        title="IV. Estrategia de Contenidos y Comunicación",
        description="Define cómo entregarás tu valor al mundo a través de tu mensaje.",
        fields=(
            Field("contentPillars", "Pilares de Contenido", "Los 3-5 temas centrales sobre los que hablarás.", "textarea", True),
            Field("keyPlatforms", "Plataformas Clave", "LinkedIn, Instagram, TikTok, etc.", "textarea", True),
            Field("ctas", "Llamadas a la Acción (CTA)", '"Suscríbete", "Agenda una llamada", etc.', "textarea", True),
            Field("storytelling", "Narrativa de Marca (Storytelling)", "La historia detrás de tu marca.", "textarea", True),
        ),
    ),
    Section(
        id="experience",
        title="V. Experiencia de Marca y Consistencia",
        description="Planifica la implementación de tu marca en cada punto de contacto.",
        fields=(
            Field("touchpoints", "Puntos de Contacto (Touchpoints)", "Sitio web, correo electrónico, tarjetas, etc.", "textarea"),
            Field("consistency", "Estrategia de Consistencia", "¿Cómo asegurarás la coherencia en todos los canales?", "textarea"),
            Field("feedback", "Mecanismos de Feedback", "¿Cómo recolectarás comentarios para mejorar?", "textarea"),
            Field("commitment", "Compromiso de Marca", "¿Cómo tus acciones reflejarán tus valores?", "textarea"),
        ),
    ),
)


def field_ids() -> list[str]:
    return [f.id for s in SECTIONS for f in s.fields]


def generated_field_ids() -> list[str]:
    return [f.id for s in SECTIONS for f in s.fields if f.is_generated]


def text_field_ids() -> list[str]:
    return [f.id for s in SECTIONS for f in s.fields if f.type == "textarea"]
