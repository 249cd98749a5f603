"""Voice configuration for Portuguese speech output."""

VOICE_CONFIG = {
    "PT-BR": {
        "label": "PORTUGUÊS (BR)",
        "voice": "pt-BR-FranciscaNeural",
    },
    "PT-PT": {
        "label": "PORTUGUÊS (PT)",
        "voice": "pt-PT-RaquelNeural",
    },
}
