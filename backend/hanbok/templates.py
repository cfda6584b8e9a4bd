"""
Prompt templates for each content kind.
Each template defines the model setting to use and the system/user prompts sent to OpenAI.
"""

LESSON_PROMPT = """You are a {language} micro-lesson writer for English-speaking beginners.

TASK
Create a self-contained slideshow that teaches ONE clear concept about "{topic}".

OUTPUT RULES
- Return ONLY valid JSON: no markdown, no comments, no code fences.
- {min_slides}-{max_slides} slides total, each 10-20 words max.
- Final slide is always: "{cta_text}"
- No slide may repeat information from a previous slide.
- Do NOT output the words "Concept", "Example", or any markdown symbols (* _ # `).
- Teach a fact before you quiz it.
- Use 2-3 {language} words with romanization in ( ).
- Highlight differences in meaning or usage if relevant.

SLIDE TYPES
1. HOOK (slide 1) - 12 words or fewer, rhetorical question, contrast or "Stop saying X". Must start with "{hook_prefix}".
2. CONTENT (slides 2-n) - each introduces exactly one new point (definition, example, nuance).
3. QUIZ (optional) - one fill-in-blank question that tests the point taught immediately before it. Follow with an ANSWER slide.
4. CTA (final) - the fixed HanbokStudy line.

JSON SCHEMA
{{
  "title": "<English lesson title>",
  "slides": [
    {{ "text": "<Hook>", "type": "hook" }},
    {{ "text": "<Point>", "type": "content" }},
    {{ "text": "{cta_text}", "type": "cta" }}
  ]
}}

First craft an outline to ensure logical flow: Hook -> Point 1 -> Point 2 -> (Quiz?) -> Answer -> CTA.
Then convert to JSON. Do NOT reveal the outline, only output the JSON.
"""

CHEAT_SHEET_PROMPT = """You are a Korean vocabulary cheat sheet generator. Create a vocabulary list for "{topic}" for English-speaking Korean beginners.

CRITICAL: Return ONLY valid JSON, no markdown, no code blocks, no additional text.

STRUCTURE
- TITLE SLIDE: "Korean Vocab of the Day: [Topic] [Emoji]"
- Alternating pattern of category introduction -> vocabulary list
- MAXIMUM {max_slides} SLIDES TOTAL (including title and CTA)
- 8-12 items per vocabulary slide
- Include romanization (Revised Romanization of Korean)
- END WITH CTA SLIDE: "Follow for more Korean lessons! 📚"

CONTENT GUIDELINES
- Focus on the most essential vocabulary for the topic
- Group related words into 2-3 logical categories
- Use simple, beginner-friendly English translations
- Include practical, commonly used words

Return this exact JSON structure:
{{
  "title": "Korean Vocabulary: [Topic]",
  "slides": [
    {{ "type": "title", "text": "Korean Vocab of the Day: [Topic] [Emoji]" }},
    {{ "type": "category", "text": "[Category Name] [Emoji]" }},
    {{
      "type": "vocabulary",
      "items": [
        {{"korean": "밥", "romanization": "bap", "english": "rice"}},
        {{"korean": "김치", "romanization": "gimchi", "english": "kimchi"}}
      ]
    }},
    {{ "type": "cta", "text": "Follow for more Korean lessons! 📚" }}
  ]
}}
"""

SENTENCE_ANALYSIS_PROMPT = """You are a Korean grammar teacher breaking one sentence down for English-speaking learners.

SENTENCE
{topic}

TASK
Split the sentence into tokens (words with their attached particles or endings, in order) and explain each.
Concatenating the token surfaces with the original spacing must reproduce the sentence.

CRITICAL: Return ONLY valid JSON, no markdown, no additional text.

JSON SCHEMA
{{
  "id": "<short-english-slug>",
  "version": "1",
  "topic": "<grammar point in a few words>",
  "sentence": {{
    "hangul": "<the sentence exactly as given>",
    "romanization": "<Revised Romanization>",
    "translation": {{ "natural_en": "<natural English>", "literal_en": "<word-for-word English>" }}
  }},
  "tokens": [
    {{
      "surface": "<token as written>",
      "romanization": "<romanization>",
      "lemma": "<dictionary form>",
      "pos": "<part of speech>",
      "role": "<grammatical role, snake_case, e.g. time_adverb, subject, cause_connector, predicate>",
      "morphology": {{ "<component>": "<meaning>" }},
      "gloss_en": "<English gloss>",
      "notes": "<one short teaching note, optional>"
    }}
  ],
  "chunks": [ {{ "text": "<phrase>", "token_indexes": [0, 1], "function": "<what the phrase does>" }} ],
  "quiz": {{ "question": "<fill-in-the-blank>", "answer": "<answer>" }},
  "slides": [ {{ "title": "<narrative slide title>", "body": "<one or two sentences>" }} ],
  "render_hints": {{
    "theme": "notebook_dark_overlay",
    "primary_color": "#F2C14E",
    "secondary_color": "#8FA3BF",
    "highlight_map": {{ "subject": "#7AD3A8", "predicate": "#F2C14E", "connector": "#E58F65" }}
  }}
}}
"""

PROMPTS = {
    "lesson": {
        "id": "lesson",
        "name": "Classic Lesson",
        "description": "Hook, one point per slide, fixed call to action",
        "model_setting": "lesson_model",
        "system": "You write short, accurate language lessons. Respond with JSON only.",
        "user": LESSON_PROMPT,
    },
    "cheat-sheet": {
        "id": "cheat-sheet",
        "name": "Vocabulary Cheat Sheet",
        "description": "Title, categories and vocabulary grids",
        "model_setting": "cheat_sheet_model",
        "system": None,
        "user": CHEAT_SHEET_PROMPT,
    },
    "sentence-analysis": {
        "id": "sentence-analysis",
        "name": "Sentence Analysis",
        "description": "One slide per token with role highlighting",
        "model_setting": "analysis_model",
        "system": "You are a precise Korean linguist. Respond with JSON only.",
        "user": SENTENCE_ANALYSIS_PROMPT,
    },
}


def get_prompt(kind: str) -> dict:
    """Get the prompt template for a content kind."""
    if kind not in PROMPTS:
        raise ValueError(f"Prompt '{kind}' not found. Available: {list(PROMPTS.keys())}")
    return PROMPTS[kind]

