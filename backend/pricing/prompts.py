# pricing/prompts.py

SUGGEST_PRICE_PER_KG = """You are a logistics pricing expert. Based on historical delivery data, you will suggest an average price per KG for a new delivery.

Consider the following factors:
- Description of goods: {goods}
- Weight (kg): {weight_kg}
- Departure Location: {departure_location}
- Destination: {destination}

Provide a suggested price per KG in Ariary, along with a brief explanation of your reasoning.
Answer with a JSON object: {{"suggestedPricePerKg": <number>, "reasoning": "<text>"}}
"""

# Gemini structured-output schema for the answer above
SUGGESTION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "suggestedPricePerKg": {
            "type": "NUMBER",
            "description": "The suggested price per kilogram in Ariary based on historical data.",
        },
        "reasoning": {
            "type": "STRING",
            "description": "The reasoning behind the suggested price.",
        },
    },
    "required": ["suggestedPricePerKg", "reasoning"],
}


def render_suggest_price(request) -> str:
    return SUGGEST_PRICE_PER_KG.format(**request.prompt_vars())
