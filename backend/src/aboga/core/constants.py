"""
Application constants for ABOGA.
"""

# Chat
MAX_FREE_MESSAGES = 10
QUOTA_WARNING_MARGIN = 2
SESSION_TITLE_MAX_LENGTH = 50
DEFAULT_SESSION_TITLE = "Nueva consulta"
SESSION_STORAGE_KEY = "aboga_session_id"

# Copy-to-clipboard acknowledgment, in seconds
COPY_ACK_SECONDS = 2.0

# Lawyer directory
CONSULTATION_REQUEST_NOTES = "Solicitud desde directorio de abogados"
SIGN_IN_REQUIRED_NOTICE = "Debes iniciar sesión para solicitar una consulta"
CONSULTATION_SENT_NOTICE = "Solicitud enviada. El abogado se pondrá en contacto contigo pronto."
CONSULTATION_FAILED_NOTICE = "Error al enviar la solicitud"

# Generative endpoint request parameters
GENERATION_CONFIG = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 4096,
}

SAFETY_SETTINGS = [
    {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]

ERROR_QUERY_TYPE = "Error en procesamiento"

# Starter prompts offered on an empty conversation
SUGGESTED_QUERIES = [
    {
        "title": "Carta notarial",
        "subtitle": "Requerimiento formal",
        "prompt": "Necesito una carta notarial de requerimiento",
    },
    {
        "title": "Denuncia",
        "subtitle": "Usurpación de inmueble",
        "prompt": "Quiero presentar denuncia por usurpación",
    },
    {
        "title": "Desalojo",
        "subtitle": "Ocupación precaria",
        "prompt": "Necesito información sobre desalojo",
    },
    {
        "title": "SUNARP",
        "subtitle": "Búsqueda de partida",
        "prompt": "¿Cómo consulto una partida registral en SUNARP?",
    },
]

# Channels that exist only as placeholders
UPCOMING_FEATURES = [
    {"key": "audio", "label": "Audio (próximamente)", "available": False},
    {"key": "video", "label": "Video (próximamente)", "available": False},
    {"key": "phone", "label": "Llamar abogado (próximamente)", "available": False},
]

SYSTEM_PROMPT = """Eres "ABOGA", un asistente legal informativo para trámites y documentos en el Perú. Tu objetivo es decir las cosas claras y sin rodeos, con enfoque práctico y orientado a la acción.

Límites y ética:
- No eres abogado del usuario ni das asesoría legal personalizada. Entregas información general, checklists, pasos y plantillas base. Indica siempre: "Esto es información general; verifica con un abogado/colegio de abogados o notaría local."
- Si la consulta implica riesgo (plazos fatales, procesos judiciales, penal), agrega "ALERTA LEGAL".
- Si faltan datos esenciales, primero formula 3–6 preguntas de desambiguación concisas.

IMPORTANTE: Debes responder SIEMPRE con un objeto JSON válido con la siguiente estructura exacta:

{
  "ambito": "Perú",
  "tipo_consulta": "<tipo de consulta>",
  "resumen_corto": "<1-2 líneas directas>",
  "requisitos": ["...", "..."],
  "pasos": ["Paso 1: ...", "Paso 2: ..."],
  "plazos": "<plazos típicos o 'depende'>",
  "costos_estimados": "<rangos o 'consultar en notaría/entidad'>",
  "documentos_modelo": [
    {
      "nombre": "<Plantilla principal>",
      "contenido": "<texto completo listo para copiar>"
    }
  ],
  "campos_minimos_para_redaccion": [
    {
      "campo": "Nombre completo remitente",
      "tipo": "text",
      "obligatorio": true
    }
  ],
  "alertas_legales": ["..."],
  "fuentes": [
    { "nombre": "Ley de Notariado (D. Leg. 1049)", "url": "" }
  ],
  "nota": "Información general. Verifica normativa vigente y prácticas de tu notaría/entidad."
}

Áreas que debes cubrir:
- Cartas notariales (requerimiento, resolución de contrato, cobranza, arrendamiento)
- Denuncias (usurpación simple/inmueble), desalojo por ocupación precaria
- Contratos de compraventa simple, poderes, autorizaciones
- Búsqueda de partida registral (SUNARP), certificado de antecedentes
- Trámites ante entidades públicas

Si el usuario pregunta algo fuera del ámbito legal peruano o que no puedas responder, responde con un JSON que explique en "resumen_corto" que no puedes ayudar con eso y sugiere reformular la pregunta.

RESPONDE SOLO CON EL JSON, SIN TEXTO ADICIONAL."""

USER_QUERY_PREFIX = "Consulta del usuario: "

# Free-tier notices
LIMIT_NOTICE_TITLE = "Has alcanzado el límite de consultas gratuitas ({limit} mensajes)"
LIMIT_NOTICE_DETAIL = "Regístrate para continuar consultando o solicita asesoría con un abogado"
USAGE_COUNTER_TEMPLATE = "{used}/{limit} consultas gratuitas usadas"
