"""Reference ingredient catalog seeded into an empty database."""

from enum import Enum

from .supplements import Ingredient


class IngredientCategory(str, Enum):
    """Catalog grouping for ingredients."""

    VITAMIN = "Vitamin"
    MINERAL = "Mineral"
    PERFORMANCE = "Performance"
    AMINO_ACID = "Amino Acid"
    FATTY_ACID = "Fatty Acid"
    HORMONE = "Hormone"
    HERBAL = "Herbal"
    OTHER = "Other"


def _ing(
    id: str,
    name: str,
    unit: str,
    category: IngredientCategory,
    aliases: list[str] | None = None,
) -> Ingredient:
    return Ingredient(
        id=id,
        name=name,
        default_unit=unit,
        category=category.value,
        aliases=aliases or [],
    )


V = IngredientCategory.VITAMIN
M = IngredientCategory.MINERAL
P = IngredientCategory.PERFORMANCE
A = IngredientCategory.AMINO_ACID
F = IngredientCategory.FATTY_ACID
H = IngredientCategory.HERBAL
O = IngredientCategory.OTHER

COMMON_INGREDIENTS: list[Ingredient] = [
    # Vitamins
    _ing("vitamin_a", "Vitamin A", "IU", V),
    _ing("vitamin_b1", "Vitamin B1 (Thiamine)", "mg", V, ["Thiamine"]),
    _ing("vitamin_b2", "Vitamin B2 (Riboflavin)", "mg", V, ["Riboflavin"]),
    _ing("vitamin_b3", "Vitamin B3 (Niacin)", "mg", V, ["Niacin", "Niacinamide"]),
    _ing("vitamin_b5", "Vitamin B5 (Pantothenic Acid)", "mg", V),
    _ing("vitamin_b6", "Vitamin B6 (Pyridoxine)", "mg", V),
    _ing("vitamin_b7", "Vitamin B7 (Biotin)", "mcg", V, ["Biotin"]),
    _ing("vitamin_b9", "Vitamin B9 (Folate)", "mcg", V, ["Folate", "Folic Acid"]),
    _ing("vitamin_b12", "Vitamin B12", "mcg", V, ["Cobalamin"]),
    _ing("vitamin_c", "Vitamin C", "mg", V, ["Ascorbic Acid"]),
    _ing("vitamin_d3", "Vitamin D3", "IU", V, ["Cholecalciferol"]),
    _ing("vitamin_e", "Vitamin E", "IU", V),
    _ing("vitamin_k2", "Vitamin K2", "mcg", V, ["Menaquinone"]),

    # Minerals
    _ing("calcium", "Calcium", "mg", M),
    _ing("chromium", "Chromium", "mcg", M),
    _ing("copper", "Copper", "mg", M),
    _ing("iodine", "Iodine", "mcg", M),
    _ing("iron", "Iron", "mg", M),
    _ing("magnesium", "Magnesium", "mg", M, ["Magnesium Citrate", "Magnesium Glycinate"]),
    _ing("manganese", "Manganese", "mg", M),
    _ing("molybdenum", "Molybdenum", "mcg", M),
    _ing("potassium", "Potassium", "mg", M),
    _ing("selenium", "Selenium", "mcg", M),
    _ing("sodium", "Sodium", "mg", M),
    _ing("zinc", "Zinc", "mg", M, ["Zinc Picolinate", "Zinc Gluconate"]),

    # Sports & Performance / Amino Acids
    _ing("creatine", "Creatine Monohydrate", "g", P),
    _ing("whey_protein", "Whey Protein", "g", P),
    _ing("casein_protein", "Casein Protein", "g", P),
    _ing("bcaas", "BCAAs", "g", A),
    _ing("eaas", "EAAs", "g", A),
    _ing("caffeine", "Caffeine", "mg", P),
    _ing("beta_alanine", "Beta Alanine", "g", P),
    _ing("citrulline", "L-Citrulline", "g", A, ["Citrulline Malate"]),
    _ing("arginine", "L-Arginine", "g", A),
    _ing("glutamine", "L-Glutamine", "g", A),
    _ing("taurine", "Taurine", "g", A),
    _ing("tyrosine", "L-Tyrosine", "mg", A),
    _ing("electrolytes", "Electrolytes", "servings", P),

    # Fatty Acids
    _ing("omega_3", "Omega-3 (Fish Oil)", "mg", F, ["Fish Oil"]),
    _ing("epa", "EPA", "mg", F),
    _ing("dha", "DHA", "mg", F),
    _ing("cla", "CLA", "g", F),

    # Sleep / Stress / Nootropics
    _ing("melatonin", "Melatonin", "mg", IngredientCategory.HORMONE),
    _ing("ashwagandha", "Ashwagandha", "mg", H),
    _ing("l_theanine", "L-Theanine", "mg", A),
    _ing("glycine", "Glycine", "g", A),
    _ing("gaba", "GABA", "mg", A),
    _ing("5htp", "5-HTP", "mg", A),
    _ing("rhodiola", "Rhodiola Rosea", "mg", H),
    _ing("magnesium_glycinate", "Magnesium Glycinate", "mg", M),

    # Joint / Connective Tissue
    _ing("collagen", "Collagen Peptides", "g", O),
    _ing("glucosamine", "Glucosamine", "mg", O),
    _ing("chondroitin", "Chondroitin", "mg", O),
    _ing("msm", "MSM", "g", O),

    # Longevity / Immune / General Health
    _ing("coq10", "CoQ10", "mg", O),
    _ing("curcumin", "Curcumin (Turmeric)", "mg", H),
    _ing("quercetin", "Quercetin", "mg", H),
    _ing("nac", "NAC (N-Acetyl Cysteine)", "mg", A),
    _ing("resveratrol", "Resveratrol", "mg", H),
    _ing("glutathione", "Glutathione", "mg", O),
    _ing("probiotics", "Probiotics", "CFU", O),
    _ing("fiber", "Fiber / Psyllium", "g", O),
    _ing("greens", "Greens Powder", "servings", O),
]
