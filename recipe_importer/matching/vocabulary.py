"""
Word lists for ingredient tokenization.

Units, containers, preparation descriptors and stop words carry no identity
of their own ("2 cups finely chopped onion" is about onion), so they are
stripped before an ingredient line is compared with a step.
"""

UNIT_WORDS = {
    "g", "kg", "gram", "grams", "kilogram", "kilograms",
    "ml", "l", "liter", "liters", "litre", "litres", "milliliter", "milliliters",
    "oz", "ounce", "ounces", "lb", "lbs", "pound", "pounds",
    "tsp", "tbsp", "teaspoon", "teaspoons", "tablespoon", "tablespoons",
    "cup", "cups", "pint", "pints", "quart", "quarts", "gallon", "gallons",
    "pinch", "pinches", "dash", "dashes", "handful", "handfuls",
    "clove", "cloves", "sprig", "sprigs", "stalk", "stalks", "stick", "sticks",
    "bunch", "bunches", "head", "heads", "bulb", "bulbs", "ear", "ears",
    "slice", "slices", "piece", "pieces",
    "can", "cans", "tin", "tins", "jar", "jars", "bottle", "bottles",
    "pack", "packs", "package", "packages", "box", "boxes", "bag", "bags",
    "container", "containers",
}

PREP_WORDS = {
    "chopped", "sliced", "diced", "minced", "grated", "peeled", "crushed",
    "finely", "roughly", "coarsely", "thinly", "thickly",
    "fresh", "dried", "ground", "whole", "large", "medium", "small",
    "extra", "virgin", "boneless", "skinless", "fat-free", "low-fat", "organic",
    "unsalted", "salted", "cold", "hot", "warm", "melted", "room", "temperature",
    "softened", "beaten", "whisked", "sifted", "divided", "separated", "optional",
    "garnish", "taste", "needed", "removed", "reserved", "drained", "rinsed",
    "cleaned", "trimmed", "halved", "quartered", "cubed", "chunks", "strips",
    "wedges", "beards", "scrubbed", "washed", "bruised", "leaves", "only",
    "red", "green", "shell", "shells", "skin", "skins", "bone", "bones",
    "seed", "seeds", "stem", "stems", "root", "roots", "tail", "tails",
    "extract", "granulated", "caster", "powdered", "icing", "superfine", "white",
    "active", "dry", "instant", "quick", "rise", "plain", "all-purpose", "regular",
    "fast", "action", "cut", "cutting", "cooled", "cool", "cooling", "chilled",
    "refrigerated", "refrigerator", "fridge", "freezer", "stored", "leftover",
    "leftovers", "half", "halves", "third", "thirds", "quarter", "quarters",
    "plus", "more",
}

STOP_WORDS = {"and", "or", "the", "a", "an", "of", "in", "with", "for", "to", "from", "into", "as"}

# Never chosen as the head noun of an ingredient line
HEAD_NOUN_IGNORE = PREP_WORDS | STOP_WORDS | {"into", "onto", "over", "under"}

# Step section labels containing one of these apply to every ingredient section
GENERIC_STEP_SECTIONS = {"method", "preparation", "directions", "instructions", "cook"}

FRACTION_MAP = {
    "¼": "1/4",
    "½": "1/2",
    "¾": "3/4",
    "⅓": "1/3",
    "⅔": "2/3",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}
