from __future__ import annotations

from typing import Any

from brand_studio.models import BrandProject, ContentIdea
from brand_studio.providers.base import InlineImage, PromptContents

_UNDEFINED = "No definido"

# Per-field instruction appended to the shared brand context.
BRAND_IDEA_INSTRUCTIONS: dict[str, str] = {
    "brandPromise": 'Genera 3 opciones para una "Promesa de Marca (Propuesta de Valor Única - PVU)".',
    "positioning": 'Genera 3 opciones para una declaración de "Posicionamiento de Marca".',
    "toneOfVoice": 'Define un "Tono de Voz" para la marca, describiendo su personalidad y proporcionando ejemplos. Sugiere 2 opciones.',
    "brandArchetype": 'Sugiere un "Arquetipo de Marca" principal y uno secundario que se alineen con la identidad de la marca y explica por qué.',
    "contentPillars": 'Genera 4-5 "Pilares de Contenido" sobre los que esta marca debería crear contenido.',
    "keyPlatforms": 'Recomienda 2-3 "Plataformas Clave" (redes sociales, blogs, etc.) donde esta marca debería tener presencia, y justifica por qué.',
    "ctas": 'Sugiere 5 "Llamadas a la Acción (CTAs)" que esta marca podría usar consistentemente.',
    "storytelling": 'Esboza un arco narrativo para el "Storytelling" de esta marca. Define el héroe, el conflicto, la resolución y la moraleja.',
}

CONTENT_TYPE_INSTRUCTIONS: dict[str, str] = {
    "Blog": "un artículo de blog completo y atractivo de al menos 500 palabras",
    "Social Media": "una publicación para redes sociales (por ejemplo, LinkedIn o Instagram), incluyendo un texto atractivo, emojis relevantes y 3-5 hashtags estratégicos",
    "Video": "un guion detallado para un video corto (aproximadamente 1-3 minutos), incluyendo indicaciones de escena y diálogo o voz en off",
    "Email": "un correo electrónico de marketing para un newsletter, con un asunto llamativo, un cuerpo de texto persuasivo y una clara llamada a la acción",
    "Podcast": "un esquema detallado para un episodio de podcast de 5-10 minutos, con puntos de conversación clave, introducción y conclusión",
}


def _val(data: dict[str, Any], key: str, default: str = _UNDEFINED) -> str:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return default


def brand_ideas_prompt(field_id: str, context: dict[str, Any]) -> str:
    instruction = BRAND_IDEA_INSTRUCTIONS.get(field_id)
    if instruction is None:
        raise ValueError("Sección no válida para generación de IA")
    return (
        "Eres un experto estratega de marca personal. Basado en la siguiente información sobre una marca:\n\n"
        f"Propósito y Misión: {_val(context, 'purpose')}\n"
        f"Visión: {_val(context, 'vision')}\n"
        f"Valores: {_val(context, 'values')}\n"
        f"Público Objetivo: {_val(context, 'targetAudience')}\n"
        f"Análisis de Competencia: {_val(context, 'competitorAnalysis')}\n\n"
        "Por favor, genera sugerencias para la siguiente sección de la estrategia de marca. "
        "Sé conciso, inspirador y profesional.\n"
        f"\n{instruction}"
    )


def visual_identity_prompt(context: dict[str, Any]) -> str:
    return (
        "Eres un director de arte y diseñador de marcas experto. Basado en la siguiente información de marca:\n\n"
        f"Propósito y Misión: {_val(context, 'purpose')}\n"
        f"Visión: {_val(context, 'vision')}\n"
        f"Valores: {_val(context, 'values')}\n"
        f"Público Objetivo: {_val(context, 'targetAudience')}\n"
        f"Tono de Voz: {_val(context, 'toneOfVoice')}\n"
        f"Arquetipo de Marca: {_val(context, 'brandArchetype')}\n\n"
        "Genera una identidad visual completa en formato JSON.\n"
    )


def full_brand_strategy_parts(
    description: str,
    logo: InlineImage | None = None,
    pdf_name: str | None = None,
    website_url: str | None = None,
) -> PromptContents:
    """
    Multi-part prompt: base description, then (in order) the optional logo note
    with its inline image, the PDF-name note and the website note, then the task.
    """
    parts: list[str | InlineImage] = [
        "Eres un estratega de marca de clase mundial y un director creativo. Un cliente te ha proporcionado "
        f"la siguiente descripción para una nueva marca personal o de producto:\n\n---\n{description}\n---\n\n"
    ]
    if logo is not None:
        parts.append(
            "También han proporcionado una imagen de logotipo existente como inspiración. "
            "Analízala para entender el estilo visual y el tono."
        )
        parts.append(logo)
    if pdf_name:
        parts.append(
            f'\nAdemás, han subido un documento llamado "{pdf_name}". Asume que este documento contiene '
            "información relevante sobre la marca y tenlo en cuenta."
        )
    if website_url:
        parts.append(
            f"\nTambién han proporcionado un enlace a su sitio web actual o de inspiración: {website_url}. "
            "Extrae el tono, el estilo y la audiencia de este sitio."
        )
    parts.append(
        "\nTu tarea es generar una estrategia de marca completa y coherente en formato JSON. Cubre todos los "
        "aspectos, desde los fundamentos hasta la experiencia del cliente. Sé creativo, profesional y estratégico."
    )
    return parts


def content_calendar_prompt(
    project: BrandProject,
    month_label: str,
    niche: str,
    objective: str,
    keywords: str,
) -> str:
    data = project.data
    return (
        "Eres un experto en marketing de contenidos y redes sociales. Te proporciono los detalles de una marca "
        "y una estrategia. Tu tarea es crear un calendario de contenidos para un mes específico.\n\n"
        "**Información de la Marca:**\n"
        f"*   **Nombre del Proyecto:** {project.name}\n"
        f"*   **Público Objetivo:** {_val(data, 'targetAudience')}\n"
        f"*   **Tono de Voz:** {_val(data, 'toneOfVoice', 'Profesional y accesible')}\n"
        f"*   **Pilares de Contenido:** {_val(data, 'contentPillars', 'No definidos')}\n"
        f"*   **Propósito/Misión:** {_val(data, 'purpose')}\n\n"
        "**Estrategia para este Calendario:**\n"
        f"*   **Mes:** {month_label}\n"
        f"*   **Industria/Nicho:** {niche}\n"
        f"*   **Objetivo de Marketing Principal:** {objective}\n"
        f"*   **Temas/Palabras Clave Adicionales:** {keywords}\n\n"
        "**Instrucciones:**\n"
        "1.  Genera entre 8 y 12 ideas de contenido distribuidas a lo largo del mes. No es necesario rellenar todos los días.\n"
        "2.  Varía los tipos de contenido entre 'Blog', 'Social Media', 'Video', 'Email', y 'Podcast'.\n"
        "3.  Asegúrate de que cada idea incluya un título atractivo y una breve descripción (1-2 frases) de lo que trata el contenido.\n"
        "4.  Alinea las ideas con la información de la marca y los objetivos de la estrategia.\n"
        "5.  Distribuye el contenido de forma lógica a lo largo de la semana (por ejemplo, blogs a mitad de semana, emails los martes, etc.).\n"
        "6.  Devuelve el resultado únicamente en el formato JSON especificado."
    )


def content_type_instruction(content_type: str) -> str:
    return CONTENT_TYPE_INSTRUCTIONS.get(content_type) or f'un contenido de tipo "{content_type}"'


def full_content_prompt(project: BrandProject, idea: ContentIdea) -> str:
    data = project.data
    return (
        "Eres un experto creador de contenido y copywriter. Basado en la siguiente información de marca y una "
        "idea de contenido específica, genera el contenido completo.\n\n"
        "**Información de la Marca:**\n"
        f"*   **Nombre del Proyecto:** {project.name}\n"
        f"*   **Público Objetivo:** {_val(data, 'targetAudience')}\n"
        f"*   **Tono de Voz:** {_val(data, 'toneOfVoice', 'Profesional y accesible')}\n"
        f"*   **Propósito/Misión:** {_val(data, 'purpose')}\n\n"
        "**Idea de Contenido a Desarrollar:**\n"
        f"*   **Tipo de Contenido:** {idea.content_type}\n"
        f'*   **Título:** "{idea.title}"\n'
        f"*   **Descripción:** {idea.description}\n\n"
        "**Tu Tarea:**\n"
        f"Escribe {content_type_instruction(idea.content_type)} basado en el título y la descripción proporcionados. "
        "Asegúrate de que el contenido sea de alta calidad, esté bien estructurado, se alinee perfectamente con el "
        "tono de voz y el público objetivo de la marca, y sea original y valioso. Devuelve únicamente el texto del "
        "contenido generado, listo para ser copiado y pegado. Usa formato Markdown para una mejor legibilidad "
        "(encabezados, listas, negritas, etc.)."
    )


def copywriting_prompt(original_text: str, tone: str, num_variations: int, context: str | None = None) -> str:
    if context:
        context_line = f'Ten en cuenta el siguiente contexto adicional: "{context}"'
    else:
        context_line = "El objetivo es de propósito general."
    return (
        "Eres un experto copywriter y estratega de comunicación. Tu tarea es reescribir un texto para mejorar su "
        "claridad, impacto y engagement, siguiendo un tono específico.\n\n"
        "**Texto Original:**\n"
        f'"{original_text}"\n\n'
        "**Instrucciones:**\n"
        f"1.  Adopta un tono **{tone}**.\n"
        f"2.  Genera **{num_variations}** variaciones diferentes del texto original.\n"
        f"3.  {context_line}\n"
        "4.  Asegúrate de que cada variación sea única y ofrezca una perspectiva ligeramente diferente o una mejor redacción.\n"
        "5.  Devuelve el resultado únicamente en el formato JSON especificado, sin texto introductorio ni explicaciones adicionales."
    )
