"""
Outfit improvement suggestions.

Each rule inspects the outfit independently and contributes at most one
fixed message. Several rules can fire for the same outfit.
"""

from typing import List, Sequence

from outfit_intel.services.colors.color_model import is_neutral, lightness_contrast
from outfit_intel.services.colors.harmony import HarmonyResult, HarmonyType
from outfit_intel.services.colors.harmony.temperature import analyze_temperature


LOW_CONTRAST_THRESHOLD = 15
HIGH_SATURATION_THRESHOLD = 70
HIGH_SATURATION_COUNT = 3

ADD_NEUTRAL = (
    "Add a neutral piece (black, white, gray, or navy) to anchor the outfit "
    "and reduce visual noise."
)
COMMIT_TEMPERATURE = (
    "You're mixing warm and cool tones. Try committing to one temperature family: {swap}."
)
SWAP_TO_WARM = "swap cool pieces for warm ones"
SWAP_TO_COOL = "swap warm pieces for cool ones"
ADD_CONTRAST = (
    "The outfit lacks contrast, so everything blends together. "
    "Try a lighter top with darker bottoms (or vice versa)."
)
TONE_DOWN = (
    "Multiple highly-saturated colors compete for attention. "
    "Tone down 1-2 pieces to let one color be the star."
)
FIX_CLASH = (
    "These colors clash. Quick fix: replace one chromatic piece with a neutral, "
    "or shift it to a neighboring hue (±30° on the color wheel)."
)
ADD_ACCENT = (
    "All neutral is safe but can feel flat. Try adding one saturated accent: "
    "a colored shoe, bag, or top layer."
)
ADD_LIGHTNESS_VARIATION = (
    "Same-hue outfit needs more light/dark variation. "
    "Try pairing a darker shade on bottom with a lighter shade on top."
)


def _average_lightness_contrast(colors: Sequence) -> float:
    contrasts = [
        lightness_contrast(colors[i], colors[j])
        for i in range(len(colors))
        for j in range(i + 1, len(colors))
    ]
    return sum(contrasts) / len(contrasts) if contrasts else 0.0


def generate_suggestions(colors: Sequence, harmony: HarmonyResult) -> List[str]:
    """
    Derive improvement suggestions for an outfit.

    Args:
        colors: Garment color records
        harmony: Harmony classification of the same colors

    Returns:
        Suggestion strings in rule order, without duplicates
    """
    colors = list(colors)
    chromatics = [c for c in colors if not is_neutral(c)]
    neutral_count = len(colors) - len(chromatics)
    temperature = analyze_temperature(colors)

    suggestions = []

    if neutral_count == 0 and len(chromatics) >= 2:
        suggestions.append(ADD_NEUTRAL)

    if temperature.warm_count > 0 and temperature.cool_count > 0 and len(chromatics) >= 2:
        swap = SWAP_TO_WARM if temperature.dominant == "warm" else SWAP_TO_COOL
        suggestions.append(COMMIT_TEMPERATURE.format(swap=swap))

    if _average_lightness_contrast(colors) < LOW_CONTRAST_THRESHOLD:
        suggestions.append(ADD_CONTRAST)

    if sum(1 for c in colors if c.hsl.s > HIGH_SATURATION_THRESHOLD) >= HIGH_SATURATION_COUNT:
        suggestions.append(TONE_DOWN)

    if harmony.type == HarmonyType.COLOR_CLASH:
        suggestions.append(FIX_CLASH)

    if not chromatics:
        suggestions.append(ADD_ACCENT)

    if harmony.type == HarmonyType.MONOCHROMATIC_FLAT:
        suggestions.append(ADD_LIGHTNESS_VARIATION)

    return list(dict.fromkeys(suggestions))
