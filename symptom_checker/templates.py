"""Static response catalog: one canonical response per symptom category.

The catalog is built once at import and shared read-only by every request.
Models are frozen and use tuples, so a request cannot mutate a template.
"""
from types import MappingProxyType
from typing import Mapping, Optional

from .rules import Category, RULE_TABLE
from .schemas import CategoryResponse, ConditionEntry

MEDICAL_DISCLAIMER = (
    "IMPORTANT MEDICAL DISCLAIMER: This analysis is for educational purposes only and should not "
    "be used as a substitute for professional medical advice, diagnosis, or treatment. Always seek "
    "the advice of qualified health providers with any questions you may have regarding a medical "
    "condition. Never disregard professional medical advice or delay seeking it because of something "
    "you have read here. If you think you may have a medical emergency, call your doctor or emergency "
    "services immediately."
)


class CatalogError(RuntimeError):
    """The static rule table or template catalog is inconsistent."""


def _condition(name, probability, description, next_steps, urgency):
    return ConditionEntry(
        name=name,
        probability=probability,
        description=description,
        next_steps=tuple(next_steps),
        urgency=urgency,
    )


# -----------------------------
# CATEGORY TEMPLATES
# -----------------------------
RESPIRATORY = CategoryResponse(
    conditions=(
        _condition(
            "Acute Bronchitis",
            "High (60-75%)",
            "Inflammation of the bronchial tubes, often following a cold or respiratory infection.",
            [
                "Stay hydrated and use a humidifier",
                "Rest and avoid irritants like smoke",
                "Use over-the-counter cough suppressants if needed",
                "See a doctor if symptoms persist beyond 3 weeks",
            ],
            "low",
        ),
        _condition(
            "Upper Respiratory Infection",
            "Medium (40-60%)",
            "Common viral infection affecting the upper respiratory tract.",
            [
                "Get plenty of rest and fluids",
                "Use saline nasal rinses",
                "Consider over-the-counter decongestants",
                "Monitor for worsening symptoms",
            ],
            "low",
        ),
    ),
    red_flags=(
        "Severe difficulty breathing",
        "Chest pain with breathing",
        "Blue lips or fingernails",
        "High fever with cough",
    ),
    general_advice="Respiratory symptoms often resolve with rest and supportive care. Avoid smoking and secondhand smoke.",
    when_to_seek_help="Seek immediate care for severe breathing difficulties. Contact your provider for persistent symptoms beyond 10 days.",
)

GASTROINTESTINAL = CategoryResponse(
    conditions=(
        _condition(
            "Viral Gastroenteritis",
            "High (65-80%)",
            "Common viral infection causing inflammation of the stomach and intestines.",
            [
                "Stay hydrated with clear fluids",
                "Follow the BRAT diet (bananas, rice, applesauce, toast)",
                "Rest and avoid dairy temporarily",
                "Gradually return to normal diet as symptoms improve",
            ],
            "low",
        ),
        _condition(
            "Food Poisoning",
            "Medium (30-50%)",
            "Illness caused by consuming contaminated food or beverages.",
            [
                "Maintain hydration with electrolyte solutions",
                "Avoid solid foods until vomiting stops",
                "Monitor for signs of dehydration",
                "Consider probiotics after acute phase",
            ],
            "medium",
        ),
    ),
    red_flags=(
        "Signs of severe dehydration",
        "Blood in vomit or stool",
        "High fever with abdominal pain",
        "Severe abdominal cramping",
    ),
    general_advice="Most gastrointestinal illnesses are self-limiting. Focus on hydration and gradual food reintroduction.",
    when_to_seek_help="Seek care for signs of dehydration, blood in stool/vomit, or symptoms lasting more than 3 days.",
)

NEUROLOGICAL = CategoryResponse(
    conditions=(
        _condition(
            "Tension Headache",
            "High (70-85%)",
            "Most common type of headache, often related to stress, fatigue, or muscle tension.",
            [
                "Apply hot or cold compress to head/neck",
                "Practice relaxation techniques",
                "Use over-the-counter pain relievers as directed",
                "Maintain regular sleep schedule",
            ],
            "low",
        ),
        _condition(
            "Migraine",
            "Medium (35-50%)",
            "Neurological condition causing severe headaches, often with sensitivity to light and sound.",
            [
                "Rest in a dark, quiet room",
                "Apply cold compress to forehead",
                "Stay hydrated and avoid triggers",
                "Consider prescription migraine medications",
            ],
            "medium",
        ),
    ),
    red_flags=(
        "Sudden severe headache unlike any before",
        "Headache with fever and neck stiffness",
        "Headache with vision changes",
        "Confusion or difficulty speaking",
    ),
    general_advice="Track headache patterns and potential triggers. Maintain regular sleep and meal schedules.",
    when_to_seek_help="Seek immediate care for sudden severe headaches or headaches with neurological symptoms.",
)

MUSCULOSKELETAL = CategoryResponse(
    conditions=(
        _condition(
            "Muscle Strain",
            "High (60-75%)",
            "Overstretching or tearing of muscle fibers, often due to physical activity or sudden movement.",
            [
                "Apply ice for first 24-48 hours",
                "Rest the affected area",
                "Use over-the-counter anti-inflammatory medications",
                "Gentle stretching after initial inflammation subsides",
            ],
            "low",
        ),
        _condition(
            "Arthritis Flare-up",
            "Medium (30-45%)",
            "Inflammation of joints causing pain, stiffness, and potential swelling.",
            [
                "Apply heat or cold as preferred",
                "Gentle range-of-motion exercises",
                "Anti-inflammatory medications as prescribed",
                "Consider physical therapy consultation",
            ],
            "low",
        ),
    ),
    red_flags=(
        "Severe joint swelling and redness",
        "Inability to bear weight or use affected area",
        "Signs of infection at injury site",
        "Numbness or tingling",
    ),
    general_advice="Most muscle and joint pain improves with rest and conservative treatment. Stay active within pain limits.",
    when_to_seek_help="Contact provider for severe pain, signs of infection, or symptoms not improving after a week.",
)

SKIN = CategoryResponse(
    conditions=(
        _condition(
            "Contact Dermatitis",
            "High (55-70%)",
            "Skin reaction caused by contact with an irritant or allergen.",
            [
                "Identify and avoid the triggering substance",
                "Apply cool compresses to affected area",
                "Use gentle, fragrance-free moisturizers",
                "Consider topical corticosteroids for severe itching",
            ],
            "low",
        ),
        _condition(
            "Eczema Flare-up",
            "Medium (35-50%)",
            "Chronic skin condition causing dry, itchy, and inflamed skin patches.",
            [
                "Moisturize frequently with thick creams",
                "Avoid known triggers and harsh soaps",
                "Use prescribed topical medications",
                "Keep fingernails short to prevent scratching",
            ],
            "low",
        ),
    ),
    red_flags=(
        "Signs of skin infection (pus, red streaks)",
        "Rapid spreading of rash",
        "Difficulty breathing with skin symptoms",
        "Fever accompanying skin changes",
    ),
    general_advice="Most skin conditions improve with gentle care and avoiding irritants. Keep skin moisturized.",
    when_to_seek_help="Seek care for signs of infection, rapidly spreading rashes, or severe symptoms affecting daily life.",
)

FLU_LIKE = CategoryResponse(
    conditions=(
        _condition(
            "Viral Upper Respiratory Infection",
            "High (70-85%)",
            "Common viral infection affecting the upper respiratory tract, causing systemic symptoms.",
            [
                "Rest and stay well-hydrated with plenty of fluids",
                "Use over-the-counter pain relievers as directed",
                "Monitor temperature and symptoms progression",
                "Maintain good hygiene to prevent spread",
            ],
            "low",
        ),
        _condition(
            "Seasonal Influenza",
            "Medium (40-60%)",
            "Influenza virus infection causing systemic symptoms including fever, fatigue, and body aches.",
            [
                "Rest and increase fluid intake significantly",
                "Consider antiviral medication if within 48 hours of onset",
                "Use symptom relief medications as appropriate",
                "Isolate to prevent spreading to others",
            ],
            "medium",
        ),
    ),
    red_flags=(
        "High fever above 103°F (39.4°C)",
        "Difficulty breathing or shortness of breath",
        "Persistent vomiting preventing fluid intake",
        "Signs of severe dehydration",
    ),
    general_advice="Most viral infections resolve with rest and supportive care. Maintain good hygiene practices.",
    when_to_seek_help="Contact provider for high fever, difficulty breathing, or symptoms not improving after 7-10 days.",
)

ENT = CategoryResponse(
    conditions=(
        _condition(
            "Viral Pharyngitis",
            "High (65-80%)",
            "Viral infection of the throat causing soreness and irritation.",
            [
                "Gargle with warm salt water",
                "Use throat lozenges or warm tea with honey",
                "Stay hydrated and rest your voice",
                "Use a humidifier to add moisture to air",
            ],
            "low",
        ),
        _condition(
            "Allergic Rhinitis",
            "Medium (40-55%)",
            "Allergic reaction causing nasal congestion, runny nose, and sneezing.",
            [
                "Identify and avoid allergens if possible",
                "Use antihistamines as directed",
                "Try nasal saline rinses",
                "Consider air purifiers for indoor allergens",
            ],
            "low",
        ),
    ),
    red_flags=(
        "Difficulty swallowing or breathing",
        "High fever with severe throat pain",
        "White patches on throat",
        "Swollen lymph nodes with fever",
    ),
    general_advice="Most throat and nasal symptoms are viral and resolve on their own. Avoid irritants like smoking.",
    when_to_seek_help="Seek care for difficulty swallowing, high fever, or symptoms lasting more than 10 days.",
)

CARDIAC = CategoryResponse(
    conditions=(
        _condition(
            "Anxiety-Related Chest Discomfort",
            "Medium (45-60%)",
            "Chest discomfort related to anxiety or panic attacks.",
            [
                "Practice deep breathing exercises",
                "Try relaxation techniques",
                "Avoid caffeine and stimulants",
                "Consider stress management counseling",
            ],
            "medium",
        ),
        _condition(
            "Musculoskeletal Chest Pain",
            "Medium (35-50%)",
            "Chest pain from muscle strain or inflammation of chest wall.",
            [
                "Apply heat or ice to affected area",
                "Use anti-inflammatory medications",
                "Avoid activities that worsen pain",
                "Practice good posture",
            ],
            "low",
        ),
    ),
    red_flags=(
        "Severe crushing chest pain",
        "Chest pain with shortness of breath",
        "Pain radiating to arm, jaw, or back",
        "Chest pain with sweating or nausea",
    ),
    general_advice="Chest pain can have many causes. Any concerning chest pain should be evaluated promptly.",
    when_to_seek_help="Seek immediate emergency care for severe chest pain, especially with other cardiac symptoms.",
)

MENTAL_HEALTH = CategoryResponse(
    conditions=(
        _condition(
            "Sleep Disorder",
            "High (60-75%)",
            "Difficulty falling asleep, staying asleep, or poor sleep quality.",
            [
                "Maintain consistent sleep schedule",
                "Create relaxing bedtime routine",
                "Limit screen time before bed",
                "Avoid caffeine late in the day",
            ],
            "low",
        ),
        _condition(
            "Stress-Related Symptoms",
            "Medium (40-55%)",
            "Physical and emotional symptoms related to psychological stress.",
            [
                "Practice stress reduction techniques",
                "Consider counseling or therapy",
                "Maintain regular exercise routine",
                "Connect with support systems",
            ],
            "medium",
        ),
    ),
    red_flags=(
        "Thoughts of self-harm",
        "Severe mood changes affecting daily function",
        "Complete inability to sleep for days",
        "Hallucinations or delusions",
    ),
    general_advice="Mental health is as important as physical health. Don't hesitate to seek professional support.",
    when_to_seek_help="Contact mental health professionals for persistent symptoms or any thoughts of self-harm.",
)

EYE = CategoryResponse(
    conditions=(
        _condition(
            "Viral Conjunctivitis",
            "High (60-75%)",
            "Viral infection of the eye causing redness, tearing, and discharge.",
            [
                "Apply cool compresses to eyes",
                "Avoid touching or rubbing eyes",
                "Use artificial tears for comfort",
                "Practice good hand hygiene",
            ],
            "low",
        ),
        _condition(
            "Dry Eye Syndrome",
            "Medium (35-50%)",
            "Insufficient tear production or poor tear quality causing eye discomfort.",
            [
                "Use preservative-free artificial tears",
                "Take breaks from screen time",
                "Use a humidifier",
                "Avoid windy or dry environments",
            ],
            "low",
        ),
    ),
    red_flags=(
        "Sudden vision loss",
        "Severe eye pain with vision changes",
        "Flashing lights or floaters",
        "Chemical exposure to eyes",
    ),
    general_advice="Most eye irritation resolves with gentle care. Protect eyes from irritants and UV light.",
    when_to_seek_help="Seek immediate care for sudden vision changes or severe eye pain.",
)

# -----------------------------
# FALLBACK TEMPLATES
# -----------------------------
DEFAULT = CategoryResponse(
    conditions=(
        _condition(
            "Requires Professional Medical Evaluation",
            "Assessment Needed",
            "The symptoms described require professional medical evaluation for proper assessment and diagnosis.",
            [
                "Schedule an appointment with your primary healthcare provider",
                "Keep a detailed log of symptoms including timing, severity, and triggers",
                "Note any alleviating or worsening factors",
                "Prepare a list of current medications and relevant medical history",
            ],
            "medium",
        ),
    ),
    red_flags=(
        "Severe or rapidly worsening symptoms",
        "Signs of emergency medical conditions",
        "Symptoms significantly affecting daily function",
    ),
    general_advice="When in doubt about symptoms, it's always best to consult with healthcare professionals who can provide proper evaluation.",
    when_to_seek_help="Contact your healthcare provider to discuss these symptoms and determine the appropriate next steps for evaluation and care.",
)

UNAVAILABLE = CategoryResponse(
    conditions=(
        _condition(
            "Analysis Service Temporarily Unavailable",
            "N/A",
            "The AI analysis service is currently unavailable. Please consult with a healthcare provider directly.",
            [
                "Contact your primary healthcare provider",
                "Visit an urgent care center if symptoms are concerning",
                "Call emergency services if experiencing severe symptoms",
                "Try the service again later",
            ],
            "medium",
        ),
    ),
    red_flags=("Any severe or rapidly worsening symptoms",),
    general_advice="When AI services are unavailable, always err on the side of caution and seek professional medical advice.",
    when_to_seek_help="Contact healthcare providers directly for symptom evaluation when automated services are unavailable.",
)

CATALOG: Mapping[Category, CategoryResponse] = MappingProxyType({
    Category.RESPIRATORY: RESPIRATORY,
    Category.GASTROINTESTINAL: GASTROINTESTINAL,
    Category.NEUROLOGICAL: NEUROLOGICAL,
    Category.MUSCULOSKELETAL: MUSCULOSKELETAL,
    Category.SKIN: SKIN,
    Category.FLU_LIKE: FLU_LIKE,
    Category.ENT: ENT,
    Category.CARDIAC: CARDIAC,
    Category.MENTAL_HEALTH: MENTAL_HEALTH,
    Category.EYE: EYE,
})


def lookup(category: Optional[Category]) -> CategoryResponse:
    """Template for a category; no category means the evaluation-needed default."""
    if category is None:
        return DEFAULT
    return CATALOG[category]


def validate_catalog(rules=RULE_TABLE, catalog=CATALOG) -> None:
    """Check the rule table and catalog agree. Raises CatalogError at startup."""
    ruled = [rule.category for rule in rules]
    if len(set(ruled)) != len(ruled):
        raise CatalogError("A category appears more than once in the rule table")

    priorities = [rule.priority for rule in rules]
    if len(set(priorities)) != len(priorities):
        raise CatalogError("Rule priorities must be unique")

    for rule in rules:
        if not rule.keywords:
            raise CatalogError(f"Category {rule.category.value} has no keywords")
        for keyword in rule.keywords:
            if not keyword.strip() or keyword != keyword.lower():
                raise CatalogError(f"Invalid keyword {keyword!r} for {rule.category.value}")

    for category in Category:
        if category not in ruled:
            raise CatalogError(f"Category {category.value} has no rule")
        if category not in catalog:
            raise CatalogError(f"Category {category.value} has no template")
        if not catalog[category].conditions:
            raise CatalogError(f"Template for {category.value} has no conditions")
