"""
Prompt Templates (v1.0.0)
Prompts for outfit recommendation, clothing-image validation and style rating.
"""
from typing import Optional

from outfit_ai.core.links import sanitize_prompt
from outfit_ai.core.models import Gender, SituationalContext, UserProfile

RECOMMENDATION_SCHEMA = """{
  "venue": "Venue type (inferred from the description or image)",
  "ambiance": "Atmosphere and mood",
  "dominantColors": ["color1", "color2", "color3"],
  "recommendations": [
    {
      "style": "Style name (e.g., Smart Casual)",
      "colors": ["color1", "color2", "color3"],
      "outfit": "Concrete items joined with + (e.g., 'black shirt + beige shorts + white sneakers')",
      "accessories": "Recommended accessories",
      "mood": "Mood/vibe of this outfit",
      "reasoning": "Why this works for the occasion and the user"
    }
  ],
  "tips": ["tip1", "tip2", "tip3", "tip4"],
  "weatherConsiderations": "Only when weather is given",
  "locationConsiderations": "Only when location is given"
}"""

IMAGE_VALIDATION_PROMPT = """
Analyze this image to determine if it contains clothing items that can be used for outfit generation.

REQUIRED ANALYSIS:
1. Is this image of clothing items? (Yes/No)
2. What type of clothing items are visible? (List specific items)
3. Confidence level (1-100%)
4. Reasoning for your assessment

FORMAT YOUR RESPONSE EXACTLY AS:
VALID_CLOTHING: [Yes/No]
CONFIDENCE: [percentage]%
REASONING: [Brief explanation of why this is or isn't clothing]
ITEMS: [List of visible clothing items, or "None" if not clothing]

IMPORTANT GUIDELINES:
- Only classify as clothing if you can clearly see wearable garments
- Reject images of: screenshots, text, food, landscapes, people without visible clothing, objects, etc.
- Accept images of: individual clothing items, outfits on hangers, clothing laid out, etc.
- Be strict - if unsure, classify as invalid

Make sure the response is in the exact format specified above, no additional text.
"""

STYLE_CHECK_SCHEMA = """{
  "overallRating": number,
  "categoryRatings": {
    "colorHarmony": number,
    "fitAndSilhouette": number,
    "occasionAppropriate": number,
    "accessoriesBalance": number,
    "styleCoherence": number
  },
  "analysis": {
    "strengths": ["..."],
    "improvements": ["..."],
    "recommendations": ["..."],
    "missingItems": ["..."],
    "colorSuggestions": ["..."]
  },
  "venueMatch": {"score": number, "feedback": "..."}
}"""


def build_profile_context(profile: Optional[UserProfile]) -> str:
    """'Gender: male, Body Type: Slim, Height: 170cm, ...' or empty string."""
    if profile is None:
        return ""
    parts = []
    if profile.gender != Gender.UNKNOWN:
        parts.append(f"Gender: {profile.gender.value}")
    if profile.body_type:
        parts.append(f"Body Type: {profile.body_type}")
    if profile.height_cm is not None:
        parts.append(f"Height: {profile.height_cm:.0f}cm")
    if profile.weight_kg is not None:
        parts.append(f"Weight: {profile.weight_kg:.0f}kg")
    if profile.skin_tone is not None:
        parts.append(f"Skin Tone: {profile.skin_tone.value}")
    return ", ".join(parts)


def build_context_prompt(context: Optional[SituationalContext]) -> str:
    """Prompt block for weather and location, empty when neither is present."""
    if context is None:
        return ""
    blocks = []
    if context.weather is not None:
        weather = context.weather.to_prompt_context()
        if weather:
            blocks.append(f"Current Weather Conditions:\n{weather}\n"
                          "Recommend fabrics, layers and footwear suited to these conditions.")
    if context.location is not None:
        location = context.location.to_prompt_context()
        if location:
            blocks.append(f"Location & Cultural Context:\n{location}\n"
                          "Respect local cultural norms and reflect local fashion trends.")
    return "\n\n".join(blocks)


def recommendation_prompt(
    prompt: str,
    profile: Optional[UserProfile] = None,
    context: Optional[SituationalContext] = None,
    has_image: bool = False
) -> str:
    """Build the outfit recommendation prompt."""
    safe_prompt = sanitize_prompt(prompt)
    opener = (
        f'Analyze this image and the user\'s description: "{safe_prompt}"'
        if has_image else f'Based on this description: "{safe_prompt}"'
    )

    sections = [opener]

    profile_context = build_profile_context(profile)
    if profile_context:
        sections.append(
            f"User Profile Information:\n{profile_context}\n\n"
            "Please consider the user's body type, height, skin tone, and gender when making recommendations."
        )
        if profile is not None and profile.gender != Gender.UNKNOWN:
            sections.append(
                f"All recommendations must be appropriate for {profile.gender.value} users only."
            )

    situational = build_context_prompt(context)
    if situational:
        sections.append(situational)

    sections.append(f"Respond in the following JSON format:\n{RECOMMENDATION_SCHEMA}")
    sections.append(
        "Rules:\n"
        "- Provide 3-4 different outfit recommendations\n"
        "- Every outfit must list concrete items and colors\n"
        "- Every recommendation must include at least one color and a reasoning\n"
        + ("- Extract the dominant colors from the image and consider its lighting\n" if has_image else "")
        + "- Give practical styling tips specific to the user's body type and height\n\n"
        "Make sure the response is valid JSON only, no additional text."
    )
    return "\n\n".join(sections)


def style_check_prompt(profile: Optional[UserProfile] = None, has_venue: bool = False) -> str:
    """Build the outfit rating prompt."""
    profile_context = build_profile_context(profile) or "Not provided"
    gender = profile.gender.value if profile is not None and profile.gender != Gender.UNKNOWN else None
    venue_note = "How suitable for the venue shown" if has_venue else "General appropriateness and versatility"

    lines = [
        "You are a fashion stylist and image consultant. Analyze the provided outfit photo"
        + (" and venue photo" if has_venue else "") + " for a style assessment.",
        "",
        f"USER PROFILE: {profile_context}",
        "",
        "Rate on a 0-100 scale:",
        "- Overall rating",
        "- Color Harmony: how well colors work together and with the skin tone",
        "- Fit & Silhouette: how well clothes fit the body type and proportions",
        f"- Occasion Appropriate: {venue_note}",
        "- Accessories Balance: jewelry, bags and shoes coordination",
        "- Style Coherence: overall aesthetic unity",
        "",
        "List strengths, improvements, actionable recommendations, missing items and color suggestions.",
        "Be constructive and encouraging.",
    ]
    if gender:
        lines.append(f"All recommendations must be appropriate for {gender} users only.")
    lines.extend([
        "",
        f"Respond with valid JSON only, no markdown:\n{STYLE_CHECK_SCHEMA}",
    ])
    return "\n".join(lines)
