"""
Prompt text for the transcription, enhancement and translation calls.

Every prompt that expects structured output spells out the JSON shape; the
caller still validates the reply against the pydantic schema.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .schemas import AlternativeWord

TRANSCRIBE_SYSTEM_PROMPT = """You are an expert Hindi transcriber.

You will transcribe the Hindi speech in the audio to Hindi text written in Devanagari.
If some words are ambiguous, list them with their most likely alternative spellings.
If no speech can be recognized, return an empty transcription.

RESPOND WITH JSON ONLY:
{
    "transcription": "the transcribed Hindi text",
    "alternativeTranscriptions": [
        {"word": "ambiguous word as transcribed", "alternatives": ["candidate", "candidate"]}
    ]
}"""

ENHANCE_SYSTEM_PROMPT = """You are a helpful assistant designed to enhance the output of an Automatic Speech Recognition (ASR) system.
Your task is to take the original transcribed text and a list of alternative word choices for specific words and generate an enhanced transcription.
The enhanced transcription should include the alternative word choices inline, allowing the user to easily understand potential ambiguities in the original transcription and choose the correct word.

RESPOND WITH JSON ONLY:
{"enhancedText": "the enhanced transcription"}"""

TRANSLATE_SYSTEM_PROMPT = """You translate Hindi text into natural, faithful English.
Do not add commentary or transliteration.

RESPOND WITH JSON ONLY:
{"englishText": "the English translation"}"""


def accent_hint(accent: Optional[str]) -> str:
    """Short description of the speech variety, used to bias recognition."""
    if accent == "Indian":
        return "Hindi speech with an Indian accent."
    if accent == "General":
        return "Hindi speech with a general, neutral accent."
    return "Hindi speech."


def transcribe_user_prompt(accent: Optional[str]) -> str:
    return f"Accent: {accent or 'unspecified'}\n\nTranscription:"


def enhance_user_prompt(original_text: str, alternative_words: Iterable[AlternativeWord]) -> str:
    lines = [f"Original Text: {original_text}", "", "Alternative Words:"]
    for item in alternative_words:
        lines.append(f"  - Word: {item.word}, Alternatives: {', '.join(item.alternatives)}")
    lines.append("")
    lines.append("Please generate the enhanced transcription, clearly indicating the alternative word choices for each ambiguous word.")
    return "\n".join(lines)


def translate_user_prompt(hindi_text: str) -> str:
    return f"Translate the following Hindi text to English:\n\n{hindi_text}"
