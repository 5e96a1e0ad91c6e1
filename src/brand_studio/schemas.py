"""
Static response schemas for structured generation calls.

Shapes follow the google-genai `Schema` dict form (upper-case type names). The
OpenAI backend converts them to JSON Schema before sending.
"""

from __future__ import annotations

from typing import Any


def _typography(description: str) -> dict[str, Any]:
    return {
        "type": "OBJECT",
        "description": description,
        "properties": {
            "fontFamily": {"type": "STRING"},
            "description": {"type": "STRING"},
        },
        "required": ["fontFamily", "description"],
    }


VISUAL_IDENTITY_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "logoConcept": {
            "type": "STRING",
            "description": "Un concepto detallado para un logotipo, describiendo el símbolo, la tipografía y el sentimiento que debe evocar.",
        },
        "colorPalette": {
            "type": "ARRAY",
            "description": "Una paleta de 5 colores (primario, secundario, acento, neutro claro, neutro oscuro).",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "hex": {"type": "STRING", "description": "El código hexadecimal del color (ej. #4F46E5)."},
                    "name": {"type": "STRING", "description": "Un nombre evocador para el color (ej. Azul Confianza)."},
                    "description": {"type": "STRING", "description": "Cómo y cuándo usar este color."},
                },
                "required": ["hex", "name", "description"],
            },
        },
        "primaryTypography": _typography("Tipografía para títulos. Sugiere una fuente de Google Fonts."),
        "secondaryTypography": _typography(
            "Tipografía para cuerpo de texto. Sugiere una fuente de Google Fonts que combine bien."
        ),
        "photographyStyle": {
            "type": "STRING",
            "description": "Describe el estilo fotográfico (ej. minimalista, vibrante, documental, profesional, etc.).",
        },
    },
    "required": ["logoConcept", "colorPalette", "primaryTypography", "secondaryTypography", "photographyStyle"],
}


_STRATEGY_FIELDS: dict[str, str] = {
    "purpose": "El por qué existe la marca (propósito) y qué hace (misión).",
    "vision": "La meta a largo plazo de la marca.",
    "values": "Una lista o párrafo con los 3-5 principios éticos y profesionales de la marca.",
    "targetAudience": "Una descripción detallada del 'Buyer Persona' o público objetivo.",
    "brandPromise": "La Propuesta de Valor Única (PVU), el beneficio específico que ofrece.",
    "competitorAnalysis": "Un breve análisis de 2-3 competidores, destacando sus debilidades.",
    "positioning": "Una declaración clara de posicionamiento de marca.",
    "toneOfVoice": "La personalidad de la marca al comunicarse (ej. 'Amigable y profesional, con un toque de humor').",
    "brandArchetype": "El arquetipo principal que encarna la marca (ej. 'El Sabio').",
    "contentPillars": "Una lista de 3-5 temas centrales para la creación de contenido.",
    "keyPlatforms": "Las 2-3 plataformas (redes sociales, etc.) más importantes para la marca y por qué.",
    "ctas": "Una lista de 3-5 llamadas a la acción (CTAs) comunes.",
    "storytelling": "Un breve arco narrativo o la historia central de la marca.",
    "touchpoints": "Lista de puntos de contacto clave del cliente con la marca.",
    "consistency": "Una breve estrategia para mantener la consistencia de la marca.",
    "feedback": "Sugerencias de mecanismos para recolectar feedback.",
    "commitment": "Una declaración de cómo las acciones de la marca reflejarán sus valores.",
}


def _full_strategy_schema() -> dict[str, Any]:
    properties: dict[str, Any] = {
        name: {"type": "STRING", "description": desc} for name, desc in _STRATEGY_FIELDS.items()
    }
    # Keep document order: visualIdentity sits between the archetype and content sections.
    ordered: dict[str, Any] = {}
    for name, prop in properties.items():
        ordered[name] = prop
        if name == "brandArchetype":
            ordered["visualIdentity"] = VISUAL_IDENTITY_SCHEMA
    return {"type": "OBJECT", "properties": ordered, "required": list(ordered)}


FULL_BRAND_STRATEGY_SCHEMA: dict[str, Any] = _full_strategy_schema()


CONTENT_CALENDAR_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "contentIdeas": {
            "type": "ARRAY",
            "description": "Una lista de ideas de contenido para el calendario.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "day": {"type": "NUMBER", "description": "El día del mes para esta publicación (1-31)."},
                    "contentType": {
                        "type": "STRING",
                        "description": "El tipo de contenido (e.g., 'Blog', 'Social Media', 'Video', 'Email', 'Podcast').",
                    },
                    "title": {"type": "STRING", "description": "El título o titular del contenido."},
                    "description": {"type": "STRING", "description": "Una breve descripción del contenido."},
                },
                "required": ["day", "contentType", "title", "description"],
            },
        }
    },
    "required": ["contentIdeas"],
}


def copywriting_variations_schema(num_variations: int) -> dict[str, Any]:
    return {
        "type": "OBJECT",
        "properties": {
            "variations": {
                "type": "ARRAY",
                "description": f"Una lista de {num_variations} variaciones del texto.",
                "items": {"type": "STRING"},
            }
        },
        "required": ["variations"],
    }


def to_json_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """
    Convert a genai-style schema into strict JSON Schema (lower-case types,
    additionalProperties disabled on every object).
    """
    out: dict[str, Any] = {"type": str(schema.get("type", "STRING")).lower()}
    if "description" in schema:
        out["description"] = schema["description"]
    if out["type"] == "object":
        props = schema.get("properties", {}) or {}
        out["properties"] = {k: to_json_schema(v) for k, v in props.items()}
        out["required"] = list(schema.get("required", list(props)))
        out["additionalProperties"] = False
    elif out["type"] == "array":
        out["items"] = to_json_schema(schema.get("items", {"type": "STRING"}))
    return out
