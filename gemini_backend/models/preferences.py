GENERATE_CONTENT = "generateContent"

# Fast models first, then stronger ones, then the older fallbacks
PREFERRED_MODELS = [
    "gemini-1.5-flash",
    "gemini-1.5-flash-latest",
    "gemini-1.5-flash-8b",
    "gemini-1.5-pro",
    "gemini-1.0-pro",
    "gemini-pro",
]

NO_TEXT_PLACEHOLDER = "(no text)"
