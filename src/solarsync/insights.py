"""Static knowledge-base cards shown under the dashboard."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Insight:
    category: str
    icon: str  # Material Symbols name
    color: str  # CSS colour of the category label
    title: str
    content: str


INSIGHTS: tuple[Insight, ...] = (
    Insight(
        category="Circadian Rhythm",
        icon="vital_signs",
        color="#c084fc",
        title="Mastering Your Master Clock",
        content=(
            "Your suprachiasmatic nucleus (SCN) is reset by light entering the eyes. "
            "Viewing bright light (ideally sunlight) for 10-30 minutes immediately after "
            "waking helps anchor your cortisol peak, ensuring alertness now and melatonin "
            "release 12-14 hours later."
        ),
    ),
    Insight(
        category="Solar Health",
        icon="wb_sunny",
        color="#facc15",
        title="The Vitamin D Window",
        content=(
            "Vitamin D is only synthesized when the sun is above 45° in the sky (usually "
            "10 AM - 2 PM). Morning sun signals wakefulness, but noon sun builds immunity. "
            "Short, intense exposure around solar noon is most efficient for Vitamin D "
            "production."
        ),
    ),
    Insight(
        category="Magnetism",
        icon="explore",
        color="#f87171",
        title="Geomagnetic Influence",
        content=(
            "Human biology contains magnetite crystals. Fluctuations in Earth's magnetic "
            "field (K-index > 4) can correlate with reduced Heart Rate Variability (HRV) "
            "and increased anxiety. During solar storms, prioritize grounding and stress "
            "reduction."
        ),
    ),
    Insight(
        category="Water & Moon",
        icon="water_drop",
        color="#60a5fa",
        title="Lunar Biological Tides",
        content=(
            "The human body is ~60% water. While controversial, some studies suggest lunar "
            "phases impact sleep latency (time to fall asleep) and deep sleep duration. "
            "Hydration needs may increase during the full moon due to subtle gravitational "
            "shifts."
        ),
    ),
    Insight(
        category="Blue Light",
        icon="visibility_off",
        color="#818cf8",
        title="Digital Sunset",
        content=(
            "Artificial blue light after sunset suppresses melatonin production twice as "
            "much as other wavelengths. Implementing a 'digital sunset' (avoiding screens "
            "1-2 hours before bed) is the single most effective habit for sleep quality."
        ),
    ),
)

DID_YOU_KNOW = (
    '"Circadian" comes from the Latin "circa" (about) and "dies" (day), '
    'meaning "about a day".'
)
