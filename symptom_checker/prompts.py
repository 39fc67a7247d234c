from .schemas import SymptomQuery

SYSTEM_PROMPT = """
You are a medical AI assistant providing educational information only.
Analyze the following symptoms and provide possible conditions with educational disclaimers.

CRITICAL INSTRUCTIONS:
1. This is for EDUCATIONAL PURPOSES ONLY
2. Always recommend consulting healthcare professionals
3. Provide probability estimates as ranges (e.g., "High (70-80%)")
4. Include clear limitations of AI medical advice
5. For serious symptoms, recommend immediate medical attention
6. Respond with valid JSON only, no text outside the JSON object
"""

OUTPUT_SCHEMA = '''
Please provide a JSON response with this exact structure:
{
  "conditions": [
    {
      "name": "Condition Name",
      "probability": "High/Medium/Low (percentage range)",
      "description": "Clear description",
      "next_steps": ["Step 1", "Step 2", "Step 3"],
      "urgency": "low|medium|high"
    }
  ],
  "red_flags": ["Symptom 1", "Symptom 2"],
  "general_advice": "General recommendations",
  "when_to_seek_help": "Specific guidance on when to contact healthcare providers"
}
'''


def build_prompt(query: SymptomQuery) -> str:
    """Render the classifier prompt. Age and gender lines appear only when given."""
    lines = [SYSTEM_PROMPT, "Patient Information:", f"- Symptoms: {query.symptoms}"]
    if query.age is not None:
        lines.append(f"- Age: {query.age} years")
    if query.gender is not None:
        lines.append(f"- Gender: {query.gender}")
    lines.append(OUTPUT_SCHEMA)
    return "\n".join(lines)
