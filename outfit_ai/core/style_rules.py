"""
Fallback Style Rules (v1.0.0)
Pre-authored outfit templates and styling clauses for the rule engine.

Template sets are scoped by gender. Male and female vocabularies are
disjoint (see MALE_ONLY_ITEMS / FEMALE_ONLY_ITEMS); the neutral set uses
neither and serves profiles without a known gender.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

from outfit_ai.core.models import Gender, SkinTone


@dataclass(frozen=True)
class OutfitTemplate:
    """One pre-authored look."""
    style: str
    colors: Tuple[str, ...]
    outfit: str
    accessories: str
    mood: str
    reasoning: str


def _t(style, colors, outfit, accessories, mood, reasoning) -> OutfitTemplate:
    return OutfitTemplate(style, tuple(colors), outfit, accessories, mood, reasoning)


MALE_ONLY_ITEMS = frozenset({"tie", "cufflinks", "dhoti", "lungi", "pocket square", "nehru jacket", "oxfords"})
FEMALE_ONLY_ITEMS = frozenset({
    "dress", "sundress", "skirt", "blouse", "heels", "pumps", "saree", "kurti", "palazzo",
    "leggings", "jhumkas", "bangles", "clutch", "earrings", "dupatta", "anarkali", "gown", "lehenga",
})

TemplateTable = Dict[str, Dict[Gender, Tuple[OutfitTemplate, OutfitTemplate]]]


# ==================== THEME TEMPLATES ====================

THEME_TEMPLATES: TemplateTable = {
    "rainy": {
        Gender.MALE: (
            _t("Rain-Ready Smart", ["Navy", "Gray", "Black"],
               "Navy water-resistant jacket + Gray chinos + Black waterproof boots",
               "Compact umbrella, waterproof backpack", "Weather-ready and sharp",
               "Water-resistant layers and grippy footwear keep you dry without losing polish."),
            _t("Monsoon Casual", ["Olive", "White", "Black"],
               "Olive windcheater + White t-shirt + Black quick-dry joggers + Black rubber sneakers",
               "Cap, waterproof watch", "Practical and relaxed",
               "Quick-dry fabrics and rubber soles handle puddles and sudden showers."),
        ),
        Gender.FEMALE: (
            _t("Chic Rain Day", ["Beige", "Navy", "Black"],
               "Beige trench coat + Navy blouse + Black skinny jeans + Black rain boots",
               "Umbrella, crossbody bag", "Polished under grey skies",
               "A classic trench and sealed boots keep the look put-together in wet weather."),
            _t("Monsoon Breezy", ["Teal", "White", "Gray"],
               "Teal cropped raincoat + White cotton top + Gray cropped leggings + Gray jelly flats",
               "Printed umbrella, waterproof tote", "Bright and practical",
               "Cropped hems stay clear of puddles while light layers dry quickly."),
        ),
        Gender.UNKNOWN: (
            _t("Rain-Ready Essentials", ["Navy", "Black", "Gray"],
               "Navy hooded rain jacket + Black t-shirt + Gray joggers + Black waterproof sneakers",
               "Umbrella, waterproof backpack", "Weather-ready and stylish",
               "Water-resistant materials and practical footwear for rainy conditions."),
            _t("Storm Layer", ["Olive", "Cream", "Brown"],
               "Olive parka + Cream sweater + Dark jeans + Brown waterproof boots",
               "Beanie, compact umbrella", "Cozy and protected",
               "Layered insulation under a weatherproof shell handles cold rain."),
        ),
    },
    "humid": {
        Gender.MALE: (
            _t("Humid Day Comfort", ["White", "Light Blue", "Beige"],
               "Light Blue linen shirt + White cotton t-shirt + Beige linen shorts + White canvas sneakers",
               "Cap, sunglasses", "Cool and refreshed",
               "Loose linen and cotton let air move in hot, humid conditions."),
            _t("Breathable Smart Casual", ["Sage", "White", "Tan"],
               "Sage short-sleeve polo + White chinos + Tan loafers",
               "Canvas watch strap, sunglasses", "Easy and composed",
               "Moisture-friendly fabrics keep a smart look from wilting in the heat."),
        ),
        Gender.FEMALE: (
            _t("Breezy Summer Flow", ["White", "Light Blue", "Beige"],
               "White flowy cotton top + Light Blue midi skirt + Beige sandals",
               "Sun hat, woven crossbody bag", "Cool and airy",
               "Loose cotton and a flowing skirt keep air moving on sticky days."),
            _t("Linen Ease", ["Mint", "White", "Tan"],
               "Mint linen dress + White sneakers + Tan woven belt",
               "Straw tote, light scarf", "Fresh and effortless",
               "Linen wicks moisture and dries fast in high humidity."),
        ),
        Gender.UNKNOWN: (
            _t("Cool Cotton Basics", ["White", "Beige", "Light Blue"],
               "White cotton t-shirt + Beige linen pants + Light Blue canvas sneakers",
               "Sunglasses, cap", "Light and relaxed",
               "Breathable cotton and linen for hot, humid weather."),
            _t("Airy Layers", ["Sage", "Cream", "Tan"],
               "Sage linen shirt + Cream shorts + Tan sandals",
               "Bucket hat, sling bag", "Fresh and easygoing",
               "Open weaves and light colors help you stay cool and dry."),
        ),
    },
    "formal": {
        Gender.MALE: (
            _t("Business Professional", ["Navy", "White", "Gray"],
               "Navy blazer + White shirt + Gray trousers + Black oxfords",
               "Silk tie, leather belt, classic watch", "Confident and authoritative",
               "Classic business attire for professional settings."),
            _t("Modern Executive", ["Charcoal", "Light Blue", "Brown"],
               "Charcoal suit + Light Blue shirt + Brown leather loafers",
               "Pocket square, leather briefcase", "Sharp and contemporary",
               "A tailored suit with warm leather reads polished without feeling stiff."),
        ),
        Gender.FEMALE: (
            _t("Business Elegant", ["Black", "Cream", "Gold"],
               "Black sheath dress + Cream blazer + Nude pumps",
               "Gold statement jewelry, structured bag", "Sophisticated and powerful",
               "Elegant business look that commands respect."),
            _t("Power Tailoring", ["Navy", "Ivory", "Burgundy"],
               "Navy tailored pantsuit + Ivory silk blouse + Burgundy block heels",
               "Pearl studs, leather tote", "Poised and assured",
               "Sharp tailoring with a rich accent color projects confidence in the boardroom."),
        ),
        Gender.UNKNOWN: (
            _t("Classic Professional", ["Navy", "White", "Gray"],
               "Navy blazer + White button-down shirt + Gray tailored trousers + Black leather shoes",
               "Leather belt, minimal watch, professional bag", "Confident and polished",
               "Timeless tailoring suits offices, interviews and formal events."),
            _t("Refined Monochrome", ["Charcoal", "Black", "Silver"],
               "Charcoal knit sweater + Black tailored trousers + Black leather loafers",
               "Silver watch, slim portfolio", "Understated and modern",
               "A tonal palette keeps the look sleek and formal."),
        ),
    },
    "party": {
        Gender.MALE: (
            _t("Night Out Sharp", ["Black", "Burgundy", "Silver"],
               "Black slim-fit shirt + Burgundy velvet blazer + Black chinos + Black chelsea boots",
               "Silver watch, leather bracelet", "Bold and magnetic",
               "Rich textures and dark tones stand out under evening lighting."),
            _t("Party Smart Casual", ["Navy", "White", "Tan"],
               "Navy printed shirt + White jeans + Tan suede loafers",
               "Sunglasses, woven bracelet", "Fun and confident",
               "A statement print balanced by clean neutrals feels festive but effortless."),
        ),
        Gender.FEMALE: (
            _t("Glam Evening", ["Emerald", "Gold", "Black"],
               "Emerald satin slip dress + Black strappy heels",
               "Gold clutch, gold hoop earrings", "Glamorous and radiant",
               "Jewel-toned satin catches the light and turns heads at celebrations."),
            _t("Sequin Pop", ["Silver", "Black", "Pink"],
               "Silver sequin top + Black leather skirt + Pink pumps",
               "Statement earrings, mini bag", "Playful and dazzling",
               "Sparkle and a pop of color make the outfit party-ready."),
        ),
        Gender.UNKNOWN: (
            _t("Party Statement", ["Black", "Gold", "Burgundy"],
               "Black satin shirt + Black tailored pants + Burgundy velvet jacket + Black boots",
               "Gold jewelry, statement ring", "Bold and celebratory",
               "Luxe fabrics and a deep accent color fit festive evenings."),
            _t("Colour Pop Night", ["Cobalt", "White", "Silver"],
               "Cobalt shirt + White trousers + Silver sneakers",
               "Metallic watch, crossbody bag", "Vibrant and fun",
               "Bright color blocking brings energy to parties and events."),
        ),
    },
    "casual": {
        Gender.MALE: (
            _t("Casual Comfort", ["Olive", "Beige", "White"],
               "Olive t-shirt + Beige chinos + White sneakers",
               "Watch, canvas belt", "Relaxed and comfortable",
               "Easy everyday styling that looks put-together."),
            _t("Smart Casual", ["Navy", "White", "Brown"],
               "Navy polo + White chinos + Brown loafers",
               "Leather belt, watch", "Polished casual",
               "Elevated casual look for smart-casual occasions."),
        ),
        Gender.FEMALE: (
            _t("Weekend Ease", ["Olive", "Beige", "White"],
               "Olive wrap top + Beige wide-leg jeans + White sneakers",
               "Simple necklace, crossbody bag", "Relaxed and comfortable",
               "Easy everyday styling that looks put-together."),
            _t("Casual Chic", ["Navy", "White", "Tan"],
               "Navy striped blouse + White denim skirt + Tan sandals",
               "Straw tote, minimal earrings", "Fresh and polished",
               "Stripes and crisp white keep a casual outfit looking intentional."),
        ),
        Gender.UNKNOWN: (
            _t("Everyday Classic", ["Gray", "Blue", "White"],
               "Gray sweatshirt + Blue jeans + White sneakers",
               "Watch, backpack", "Relaxed and easy",
               "Reliable basics that work for errands, coffee and casual plans."),
            _t("Relaxed Layers", ["Cream", "Olive", "Brown"],
               "Cream t-shirt + Olive overshirt + Brown chinos + Brown suede sneakers",
               "Tote bag, sunglasses", "Laid-back and put-together",
               "Light layering adds depth to an everyday look."),
        ),
    },
    "summer": {
        Gender.MALE: (
            _t("Summer Casual", ["White", "Beige", "Navy"],
               "White linen shirt + Beige shorts + Navy espadrilles",
               "Sunglasses, straw hat", "Fresh and breezy",
               "Light colors and breathable fabrics for hot weather."),
            _t("Coastal Cool", ["Sky Blue", "White", "Tan"],
               "Sky Blue cuban-collar shirt + White chino shorts + Tan sandals",
               "Sunglasses, canvas tote", "Easy holiday energy",
               "Airy cuts and cool tones keep you comfortable in the sun."),
        ),
        Gender.FEMALE: (
            _t("Summer Elegant", ["Coral", "White", "Gold"],
               "Coral sundress + White sandals",
               "Gold jewelry, wide-brim hat, crossbody bag", "Effortlessly chic",
               "Bright summer colors with elegant accessories."),
            _t("Sunny Day Casual", ["Yellow", "White", "Beige"],
               "Yellow linen top + White shorts + Beige espadrilles",
               "Straw hat, sunglasses", "Bright and cheerful",
               "Breathable linen and sunny tones suit warm days."),
        ),
        Gender.UNKNOWN: (
            _t("Summer Basics", ["White", "Beige", "Coral"],
               "White linen shirt + Beige shorts + Coral canvas sneakers",
               "Sunglasses, straw hat, light scarf", "Fresh and breezy",
               "Light colors and breathable fabrics for hot weather."),
            _t("Warm Weather Ease", ["Sky Blue", "White", "Tan"],
               "Sky Blue t-shirt + White linen pants + Tan sandals",
               "Bucket hat, sunglasses", "Cool and easy",
               "Loose, light pieces keep you comfortable as temperatures climb."),
        ),
    },
    "winter": {
        Gender.MALE: (
            _t("Winter Warm", ["Navy", "Cream", "Brown"],
               "Navy wool sweater + Cream corduroy trousers + Brown leather boots",
               "Scarf, beanie, wool coat", "Cozy and warm",
               "Layered look for cold weather comfort."),
            _t("Winter Sharp", ["Camel", "Charcoal", "Black"],
               "Camel overcoat + Charcoal turtleneck + Black wool trousers + Black chelsea boots",
               "Leather gloves, wool scarf", "Sophisticated winter style",
               "Classic winter colors with refined layering."),
        ),
        Gender.FEMALE: (
            _t("Cozy Winter", ["Cream", "Navy", "Brown"],
               "Cream cable-knit sweater + Navy leggings + Brown knee-high boots",
               "Knit scarf, beanie, long coat", "Warm and comfortable",
               "Chunky knits and tall boots trap warmth on cold days."),
            _t("Winter Elegant", ["Black", "Red", "Silver"],
               "Black wool coat + Red sweater dress + Black heeled boots",
               "Silver jewelry, leather gloves, statement bag", "Sophisticated winter glamour",
               "Classic winter colors with elegant touches."),
        ),
        Gender.UNKNOWN: (
            _t("Winter Layers", ["Navy", "Cream", "Brown"],
               "Navy puffer jacket + Cream sweater + Dark jeans + Brown boots",
               "Scarf, beanie, gloves", "Cozy and warm",
               "Insulated layers for cold weather comfort."),
            _t("Winter Minimal", ["Camel", "Gray", "Black"],
               "Camel wool coat + Gray turtleneck + Black trousers + Black boots",
               "Leather gloves, wool scarf", "Clean and sophisticated",
               "A long coat over tonal knits keeps the look warm and refined."),
        ),
    },
    "versatile": {
        Gender.MALE: (
            _t("Versatile Classic", ["White", "Beige", "Black"],
               "White oxford shirt + Beige chinos + Black loafers",
               "Leather watch, belt", "Timeless and sharp",
               "Classic combination that works for most occasions."),
            _t("Modern Colour", ["Olive", "White", "Navy"],
               "Olive overshirt + White t-shirt + Navy trousers + White sneakers",
               "Minimal bracelet, sunglasses", "Fresh and contemporary",
               "Modern color combination that's both stylish and versatile."),
        ),
        Gender.FEMALE: (
            _t("Versatile Classic", ["Black", "White", "Beige"],
               "Black fitted top + White wide-leg pants + Beige flats",
               "Simple jewelry, crossbody bag", "Timeless and elegant",
               "Classic combination that works for most occasions."),
            _t("Colorful Modern", ["Coral", "Navy", "Olive"],
               "Coral blouse + Navy midi skirt + Olive ankle boots",
               "Statement earrings, colorful bag", "Fresh and contemporary",
               "Modern color combination that's both stylish and versatile."),
        ),
        Gender.UNKNOWN: (
            _t("Versatile Classic", ["Black", "White", "Beige"],
               "Black t-shirt + White pants + Beige sneakers",
               "Simple watch, crossbody bag", "Timeless and clean",
               "Classic combination that works for most occasions."),
            _t("Colorful Modern", ["Olive", "Navy", "Coral"],
               "Olive shirt + Navy pants + Coral sneakers",
               "Colorful bag, sunglasses", "Fresh and contemporary",
               "Modern color combination that's both stylish and versatile."),
        ),
    },
}


# ==================== REGIONAL TEMPLATES ====================
# Reasoning text may contain {location}; the engine fills it in.

REGIONAL_TEMPLATES: TemplateTable = {
    "North India": {
        Gender.MALE: (
            _t("North Indian Contemporary", ["Navy", "Cream", "Gold"],
               "Navy kurta + Blue jeans + Brown leather juttis",
               "Watch, leather belt, minimal chain", "Cultural modern",
               "Perfect for {location}'s contemporary culture that blends tradition with modernity."),
            _t("Business Casual Delhi", ["Charcoal", "White", "Burgundy"],
               "Charcoal blazer + White shirt + Beige chinos + Brown formal shoes",
               "Burgundy tie, watch, leather bag", "Professional power",
               "Ideal for {location}'s business environment with cultural sophistication."),
        ),
        Gender.FEMALE: (
            _t("Delhi Chic", ["Navy", "Cream", "Gold"],
               "Navy kurti + Cream palazzo pants + Gold juttis",
               "Jhumkas, bangles, ethnic bag", "Cultural modern",
               "Perfect for {location}'s contemporary culture that blends tradition with modernity."),
            _t("Professional Elegance", ["Charcoal", "White", "Burgundy"],
               "Charcoal blazer + White blouse + Burgundy trousers + Black heels",
               "Pearl jewelry, structured bag, scarf", "Professional power",
               "Ideal for {location}'s business environment with cultural sophistication."),
        ),
        Gender.UNKNOWN: (
            _t("Indo-Western Fusion", ["Navy", "Cream", "Gold"],
               "Navy mandarin-collar shirt + Cream straight pants + Gold embroidered juttis",
               "Watch, ethnic tote", "Cultural modern",
               "Perfect for {location}'s contemporary culture that blends tradition with modernity."),
            _t("Smart Layers", ["Charcoal", "White", "Burgundy"],
               "Charcoal blazer + White shirt + Burgundy trousers + Black loafers",
               "Watch, leather bag", "Professional power",
               "Ideal for {location}'s business environment with cultural sophistication."),
        ),
    },
    "South India": {
        Gender.MALE: (
            _t("South Indian Comfort", ["White", "Gold", "Maroon"],
               "White cotton shirt + Gold-bordered dhoti + Brown leather sandals",
               "Gold chain, watch", "Cultural comfort",
               "Embraces {location}'s traditional values with comfortable, climate-appropriate fabrics."),
            _t("Tech Professional", ["Light Blue", "Beige", "Brown"],
               "Light Blue linen shirt + Beige cotton trousers + Brown loafers",
               "Minimal watch, leather laptop bag", "Contemporary comfort",
               "Perfect for {location}'s tech-savvy culture with breathable fabrics for the climate."),
        ),
        Gender.FEMALE: (
            _t("Traditional Modern", ["Cream", "Maroon", "Gold"],
               "Cream cotton saree + Maroon blouse + Gold sandals",
               "Temple jewelry, jasmine flowers, silk bag", "Cultural comfort",
               "Embraces {location}'s traditional values with comfortable, climate-appropriate fabrics."),
            _t("Modern South Indian", ["Light Blue", "Beige", "Coral"],
               "Light Blue cotton dress + Beige cardigan + Coral flats",
               "Simple gold jewelry, crossbody bag", "Contemporary comfort",
               "Perfect for {location}'s tech-savvy culture with breathable fabrics for the climate."),
        ),
        Gender.UNKNOWN: (
            _t("Coastal Cotton", ["White", "Maroon", "Gold"],
               "White cotton shirt + Maroon linen pants + Gold-toned sandals",
               "Watch, cotton tote", "Cultural comfort",
               "Embraces {location}'s traditional values with comfortable, climate-appropriate fabrics."),
            _t("Tech Casual", ["Light Blue", "Beige", "Coral"],
               "Light Blue linen shirt + Beige cotton trousers + Coral canvas sneakers",
               "Minimal watch, laptop backpack", "Contemporary comfort",
               "Perfect for {location}'s tech-savvy culture with breathable fabrics for the climate."),
        ),
    },
    "West India": {
        Gender.MALE: (
            _t("Mumbai Business", ["Royal Blue", "Black", "Silver"],
               "Royal Blue formal shirt + Black trousers + Black oxfords",
               "Silver watch, cufflinks, leather briefcase", "Glamorous professional",
               "Captures {location}'s glamorous business culture and entertainment industry influence."),
            _t("Coastal Casual", ["Teal", "Olive", "Cream"],
               "Teal linen shirt + Olive shorts + Cream canvas shoes",
               "Sunglasses, canvas bag", "Relaxed coastal",
               "Ideal for {location}'s coastal climate with monsoon-appropriate, breathable fabrics."),
        ),
        Gender.FEMALE: (
            _t("Bollywood Inspired", ["Royal Blue", "Silver", "Black"],
               "Royal Blue designer dress + Silver heels",
               "Statement jewelry, black clutch, sunglasses", "Glamorous professional",
               "Captures {location}'s glamorous business culture and entertainment industry influence."),
            _t("Monsoon Ready", ["Teal", "Cream", "Olive"],
               "Teal flowy top + Cream palazzo pants + Olive sandals",
               "Light scarf, waterproof bag, minimal jewelry", "Relaxed coastal",
               "Ideal for {location}'s coastal climate with monsoon-appropriate, breathable fabrics."),
        ),
        Gender.UNKNOWN: (
            _t("Metro Professional", ["Royal Blue", "Black", "Silver"],
               "Royal Blue shirt + Black trousers + Black loafers",
               "Silver watch, laptop bag", "Glamorous professional",
               "Captures {location}'s glamorous business culture and entertainment industry influence."),
            _t("Coastal Breeze", ["Teal", "Cream", "Olive"],
               "Teal linen shirt + Cream cotton pants + Olive sneakers",
               "Sunglasses, waterproof tote", "Relaxed coastal",
               "Ideal for {location}'s coastal climate with monsoon-appropriate, breathable fabrics."),
        ),
    },
    "East India": {
        Gender.MALE: (
            _t("Intellectual Casual", ["White", "Red", "Gold"],
               "White kurta + Cotton pajama + Brown leather sandals",
               "Jhola bag, simple watch", "Cultural intellectual",
               "Reflects {location}'s rich cultural heritage and intellectual traditions."),
            _t("Modern Bengali", ["Indigo", "Cream", "Mustard"],
               "Indigo cotton shirt + Cream khadi pants + Mustard kolhapuri chappals",
               "Handwoven bag, minimal jewelry", "Artistic modern",
               "Perfect for {location}'s appreciation of handloom and artistic expression."),
        ),
        Gender.FEMALE: (
            _t("Bengali Elegance", ["White", "Red", "Gold"],
               "White handloom saree + Red blouse + Gold sandals",
               "Conch shell bangles, handwoven bag, flowers", "Cultural intellectual",
               "Reflects {location}'s rich cultural heritage and intellectual traditions."),
            _t("Artistic Expression", ["Indigo", "Cream", "Mustard"],
               "Indigo handloom dress + Cream jacket + Mustard flats",
               "Artistic jewelry, handcrafted bag, scarf", "Artistic modern",
               "Perfect for {location}'s appreciation of handloom and artistic expression."),
        ),
        Gender.UNKNOWN: (
            _t("Handloom Casual", ["White", "Red", "Gold"],
               "White handloom shirt + Red cotton pants + Gold-toned sandals",
               "Jhola bag, simple watch", "Cultural intellectual",
               "Reflects {location}'s rich cultural heritage and intellectual traditions."),
            _t("Artistic Layers", ["Indigo", "Cream", "Mustard"],
               "Indigo khadi shirt + Cream cotton trousers + Mustard canvas shoes",
               "Handcrafted tote, scarf", "Artistic modern",
               "Perfect for {location}'s appreciation of handloom and artistic expression."),
        ),
    },
    "India": {
        Gender.MALE: (
            _t("Indian Fusion", ["Navy", "Blue", "White"],
               "Navy kurta + Blue jeans + White sneakers",
               "Watch, minimal chain", "Modern fusion",
               "Versatile Indian fusion style perfect for {location}'s contemporary culture."),
            _t("Festive Classic", ["Maroon", "Cream", "Gold"],
               "Maroon nehru jacket + Cream kurta + Gold juttis",
               "Pocket square, watch", "Festive and refined",
               "Traditional silhouettes with modern cuts suit {location}'s celebrations."),
        ),
        Gender.FEMALE: (
            _t("Contemporary Indian", ["Orange", "Navy", "Cream"],
               "Orange indo-western top + Navy leggings + Cream flats",
               "Ethnic jewelry, crossbody bag", "Modern fusion",
               "Versatile Indian fusion style perfect for {location}'s contemporary culture."),
            _t("Festive Grace", ["Maroon", "Cream", "Gold"],
               "Maroon anarkali kurti + Cream dupatta + Gold juttis",
               "Jhumkas, bangles, potli bag", "Festive and refined",
               "Traditional silhouettes with modern cuts suit {location}'s celebrations."),
        ),
        Gender.UNKNOWN: (
            _t("Everyday Fusion", ["Navy", "Cream", "Orange"],
               "Navy mandarin-collar shirt + Cream chinos + Orange sneakers",
               "Watch, ethnic tote", "Modern fusion",
               "Versatile Indian fusion style perfect for {location}'s contemporary culture."),
            _t("Festive Neutral", ["Maroon", "Cream", "Gold"],
               "Maroon embroidered jacket + Cream shirt + Cream trousers + Gold juttis",
               "Statement watch, embroidered tote", "Festive and refined",
               "Traditional silhouettes with modern cuts suit {location}'s celebrations."),
        ),
    },
    "International": {
        Gender.MALE: (
            _t("International Casual", ["White", "Gray", "Black"],
               "White t-shirt + Gray jeans + Black sneakers",
               "Watch, backpack", "Universal style",
               "Versatile international style appropriate for {location}."),
            _t("Global Smart", ["Navy", "White", "Beige"],
               "Navy blazer + White t-shirt + Beige chinos + White sneakers",
               "Leather watch, weekender bag", "Polished traveler",
               "Smart-casual layers that adapt to {location}'s pace."),
        ),
        Gender.FEMALE: (
            _t("Global Chic", ["White", "Black", "Gray"],
               "White blouse + Black pants + Gray ballet flats",
               "Simple jewelry, handbag", "Universal style",
               "Versatile international style appropriate for {location}."),
            _t("Effortless Traveler", ["Navy", "Beige", "White"],
               "Navy midi dress + Beige trench coat + White sneakers",
               "Silk scarf, tote bag", "Polished traveler",
               "Smart-casual layers that adapt to {location}'s pace."),
        ),
        Gender.UNKNOWN: (
            _t("Universal Basics", ["White", "Black", "Gray"],
               "White t-shirt + Black pants + Gray sneakers",
               "Watch, backpack", "Universal style",
               "Versatile international style appropriate for {location}."),
            _t("Travel Smart", ["Navy", "White", "Beige"],
               "Navy overshirt + White t-shirt + Beige chinos + White sneakers",
               "Sunglasses, crossbody bag", "Polished traveler",
               "Smart-casual layers that adapt to {location}'s pace."),
        ),
    },
}


# ==================== KEYWORD FAMILIES ====================
# Checked in this order; the first family with a hit decides the theme.

WEATHER_KEYWORDS = (
    ("rainy", ("rain", "rainy", "raining", "drizzle", "monsoon", "storm", "stormy", "thunderstorm")),
    ("humid", ("humid", "humidity", "muggy", "sticky")),
)

OCCASION_KEYWORDS = (
    ("formal", ("formal", "business", "office", "work", "interview", "meeting", "wedding", "ceremony")),
    ("party", ("party", "event", "celebration", "club", "clubbing", "night out", "birthday")),
    ("casual", ("casual", "everyday", "daily", "weekend", "errands")),
)

SEASON_KEYWORDS = (
    ("summer", ("summer", "hot", "warm", "sunny", "beach")),
    ("winter", ("winter", "cold", "snow", "snowy", "chilly", "freezing")),
)

VENUE_RULES = (
    (("restaurant", "dining", "cafe"), "Restaurant/Cafe", "Elegant dining atmosphere"),
    (("office", "work", "business"), "Office/Workplace", "Professional and polished"),
    (("party", "celebration", "event"), "Party/Event", "Festive and celebratory"),
    (("casual", "everyday", "daily"), "Casual/Everyday", "Comfortable and relaxed"),
    (("formal", "wedding", "ceremony"), "Formal Event", "Elegant and sophisticated"),
)

DEFAULT_VENUE = ("Based on your description", "Stylish and appropriate for the occasion")


# ==================== REASONING CLAUSES ====================

BODY_TYPE_CLAUSES = {
    "slim": "Perfect for slim figures as it adds visual weight and creates curves.",
    "athletic": "Ideal for athletic builds, emphasizing your toned physique.",
    "heavy": "Flattering for your body type with strategic color blocking and fit.",
    "hourglass": "Highlights your natural curves and defined waist.",
    "pear": "Balances proportions by drawing attention upward.",
    "apple": "Creates a streamlined silhouette with strategic styling.",
    "rectangle": "Adds shape and definition to a straight silhouette.",
}

PETITE_CLAUSE = "Petite-friendly styling that elongates your frame."
TALL_CLAUSE = "Takes advantage of your height with proportional styling."

SKIN_TONE_CLAUSES = {
    SkinTone.FAIR: "Colors chosen to complement your fair skin tone without washing you out.",
    SkinTone.WHEATISH: "Colors chosen to bring out the warmth of your wheatish skin tone.",
    SkinTone.DUSKY: "Colors chosen to glow against your dusky skin tone.",
    SkinTone.DARK: "Colors chosen to create striking contrast with your dark skin tone.",
}


# ==================== TIPS ====================

BASE_TIPS = (
    "Choose colors that complement your skin tone",
    "Consider the weather and time of day",
    "Comfort is key - you'll look better when you feel good",
    "Add one statement piece to elevate your look",
)

LOCATION_BASE_TIPS = (
    "Choose colors that complement your skin tone",
    "Consider the local climate and cultural context",
    "Comfort is key - you'll look better when you feel good",
    "Respect local cultural sensitivities while expressing your style",
)

WEATHER_BASE_TIPS = (
    "Choose colors that complement your skin tone",
    "Dress for the forecast first, then for the occasion",
    "Comfort is key - you'll look better when you feel good",
    "Add one statement piece to elevate your look",
)

# Replace the trailing weather base tips, in this order
WEATHER_CONDITION_TIPS = {
    "rainy": "Water-resistant materials and practical footwear are essential",
    "cold": "Layer your clothing and choose insulating fabrics like wool and fleece",
    "hot": "Opt for breathable, lightweight fabrics in light colors that reflect heat",
    "humid": "Avoid heavy fabrics that trap moisture; choose quick-drying materials",
}

BODY_TYPE_TIPS = {
    "slim": "Layer pieces to add visual weight and create curves",
    "athletic": "Show off your toned physique with well-fitted clothing",
    "heavy": "Monochromatic outfits create a streamlined look",
    "hourglass": "Belts and waist-defining pieces are your best friends",
    "pear": "Draw attention upward with statement tops and accessories",
    "apple": "V-necks and open collars are flattering for your shape",
    "rectangle": "Structured layers and belts add definition to your frame",
}

PETITE_TIP = "High-waisted bottoms elongate your legs"
TALL_TIP = "Take advantage of your height with longer lines and layering"

SKIN_TONE_TIPS = {
    SkinTone.FAIR: "Pastels and soft colors complement your fair complexion",
    SkinTone.WHEATISH: "Earth tones and warm colors enhance your natural glow",
    SkinTone.DUSKY: "Rich jewel tones and deep colors look stunning on you",
    SkinTone.DARK: "Bright colors and metallics create beautiful contrast",
}

MAX_TIPS = 6
MAX_PROFILE_TIPS = 2
MAX_PALETTE = 4
