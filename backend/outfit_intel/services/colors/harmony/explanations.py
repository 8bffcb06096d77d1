"""
Harmony explanation templates.

Text only. Templates use str.format placeholders filled by the classifier,
so wording can be changed or localized without touching the rules.
"""

SINGLE_COLOR = "Only one garment color detected."

ACHROMATIC_CONTRAST = (
    "A bold neutral palette with strong light-dark contrast. "
    "Classic and impactful, think black and white."
)
ACHROMATIC = (
    "All neutral tones. Clean and safe, but could benefit from more contrast "
    "or a pop of color."
)

NEUTRAL_ANCHORED_POP = (
    "One vibrant color grounded by neutrals, a strong, intentional styling choice. "
    "The eye has a clear focal point."
)
NEUTRAL_ANCHORED = (
    "A muted color paired with neutrals. Understated and refined. "
    "Increasing saturation would add energy."
)

MONOCHROMATIC = (
    "Same hue family with good variation in shade/tint. Sophisticated and "
    "cohesive, shows deliberate color sense."
)
MONOCHROMATIC_FLAT = (
    "Very similar colors with little variation. Try adding contrast through "
    "lighter/darker shades or a neutral accent."
)

ANALOGOUS = "Neighboring colors create natural, eye-pleasing harmony.{neutral_note} {temperature_note}"
ANALOGOUS_NEUTRAL_NOTE = " The neutral anchor elevates this further."
ANALOGOUS_TEMPERATURE_NOTE = "Consistent temperature adds polish."

SPLIT_COMPLEMENTARY = (
    "A sophisticated alternative to direct complements. High contrast without "
    "the tension of exact opposites."
)

COMPLEMENTARY_BOLD = (
    "Two saturated opposites compete for attention without a neutral to calm "
    "things down. Powerful but intense, add a neutral to balance."
)
COMPLEMENTARY = "Opposite colors create vibrant visual tension.{anchor_note}"
COMPLEMENTARY_ANCHORED_NOTE = " The neutral anchor balances the contrast beautifully."
COMPLEMENTARY_UNANCHORED_NOTE = " A neutral piece (black, white, gray) would polish this further."

TRIADIC = (
    "Three evenly-spaced colors create vibrant, dynamic balance. Best when one "
    "color dominates and the others accent."
)

TENSION_NEUTRAL_RESCUED = (
    "These chromatic colors sit at an awkward angle, but the neutral piece "
    "reduces visual chaos. Still, consider swapping one color for an analogous shade."
)
COLOR_CLASH = (
    "Colors at awkward angles ({avg_diff}°) on the color wheel.{clash_note} "
    "Consider replacing one piece with a neutral or analogous color."
)
COLOR_CLASH_TEMPERATURE_NOTE = " Mixing warm and cool tones intensifies the clash."

TEMPERATURE_HARMONY = (
    "All chromatic colors share a {temperature} temperature. This creates a "
    "naturally cohesive feel, even if hues differ. {temperature_note}"
)
WARM_NOTE = "Warm tones feel inviting and energetic."
COOL_NOTE = "Cool tones feel calm and composed."

MIXED = (
    "The color combination doesn't follow a strong harmonic pattern. "
    "{neutral_note}consider sticking to analogous or complementary relationships."
)
MIXED_NEUTRAL_NOTE = "The neutral helps, but "
