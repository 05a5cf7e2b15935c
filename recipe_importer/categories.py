"""Shopping-category guesses for ingredient names."""

import re


def _words(*keywords: str) -> re.Pattern:
    return re.compile(r'\b(' + '|'.join(keywords) + r')\b')


# Evaluated top to bottom, first match wins. Proteins and dairy sit above
# the broad pantry/produce lists so "chicken broth" stays a meat item.
CATEGORY_RULES: list[tuple[str, re.Pattern]] = [
    ('protein/meat', _words(
        'chicken', 'beef', 'pork', 'lamb', 'turkey', 'duck', 'veal', 'bison', 'venison',
        'bacon', 'sausage', 'ham', 'steak', 'ground meat', 'mince', 'meatball', 'salami',
        'pepperoni', 'prosciutto', 'pancetta', 'lardons?', 'lard', 'suet', 'tallow',
        'chicken liver', 'chicken thigh', 'chicken breast', 'chicken drum', 'chicken wing',
        'rotisserie',
    )),
    ('protein/seafood', _words(
        'shrimp', 'prawn', 'salmon', 'tuna', 'cod', 'tilapia', 'halibut', 'bass', 'trout',
        'catfish', 'fish', 'crab', 'lobster', 'scallop', 'mussel', 'clam', 'oyster',
        'anchov(?:y|ies)', 'calamari', 'squid', 'octopus', 'mahi', 'swordfish', 'sea bass',
    )),
    ('dairy', _words(
        'milk', 'cream', 'cheese', 'butter', 'yogurt', 'yoghurt', 'sour cream',
        'crème fraîche', 'creme fraiche', 'parmesan', 'mozzarella', 'cheddar', 'ricotta',
        'mascarpone', 'brie', 'gouda', 'feta', 'gruyère', 'gruyere', 'colby', 'provolone',
        'jack cheese', 'cream cheese', 'cottage cheese', 'ghee',
    )),
    ('bakery', _words(
        'bread', 'bun', 'roll', 'tortilla', 'pita', 'naan', 'flatbread', 'croissant',
        'baguette', 'loaf', 'sourdough', 'brioche', 'ciabatta', 'focaccia', 'panini',
        'cracker', 'pretzel', 'english muffin',
    )),
    ('canned goods', _words('canned', 'can of')),
    ('frozen', _words(
        'frozen pea', 'frozen corn', 'frozen broccoli', 'frozen spinach', 'frozen edamame',
        'ice cream', 'frozen meal', 'frozen pizza',
    )),
    ('spices', _words(
        'salt', 'pepper', 'paprika', 'cumin', 'oregano', 'thyme', 'rosemary', 'cinnamon',
        'nutmeg', 'cayenne', 'chili powder', 'chilli powder', 'garlic powder',
        'onion powder', 'turmeric', 'coriander', 'cardamom', 'allspice', 'cloves',
        'bay leaf', 'bay leaves', 'dill', 'fennel', 'ginger powder', 'mustard powder',
        'curry powder', 'garam masala', 'five spice', 'old bay', 'taco seasoning',
        'italian seasoning', 'baking soda', 'baking powder', 'cream of tartar',
        'vanilla extract', 'smoked paprika', 'chipotle powder', 'ancho', 'dried basil',
        'dried oregano', 'dried thyme', 'dried parsley', 'dried rosemary', 'dried sage',
        'dried dill', 'dried cilantro', 'dried mint', 'seasoned salt', 'celery salt',
        'garlic salt', 'red pepper flakes', 'crushed red pepper',
    )),
    ('pantry', _words(
        'oil', 'vinegar', 'soy sauce', 'fish sauce', 'oyster sauce', 'worcestershire',
        'hot sauce', 'sriracha', 'hoisin', 'ketchup', 'mustard', 'mayo', 'mayonnaise',
        'salsa', 'relish', 'honey', 'maple syrup', 'molasses', 'tahini', 'pesto',
        'tomato paste', 'tomato sauce', 'diced tomatoes', 'crushed tomatoes', 'pasta sauce',
        'marinara', 'stock', 'broth', 'bouillon', 'cornstarch', 'cornflour', 'flour',
        'sugar', 'rice', 'pasta', 'noodle', 'lentil', 'chickpea', 'black bean',
        'kidney bean', 'pinto bean', 'navy bean', 'cannellini', 'coconut milk',
        'coconut cream', 'chocolate chip', 'cocoa', 'condensed milk', 'evaporated milk',
        'dried fruit', 'nut', 'seed', 'oat', 'grain', 'quinoa', 'couscous', 'bulgur',
        'barley', 'cereal', 'cracker', 'panko', 'breadcrumb', 'sprinkle', 'extract',
        'coloring', 'food color', 'raisin', 'cranberry', 'dried cranberry',
        'cooking spray', 'non-stick', 'parchment',
    )),
    ('produce', _words(
        'onion', 'garlic', 'tomato', 'pepper', 'carrot', 'celery', 'lettuce', 'spinach',
        'kale', 'broccoli', 'potato', 'mushroom', 'zucchini', 'cucumber', 'avocado',
        'lemon', 'lime', 'orange', 'apple', 'berry', 'banana', 'cilantro', 'parsley',
        'basil', 'cabbage', 'corn', 'asparagus', 'bean sprout', 'bok choy', 'brussels',
        'cauliflower', 'eggplant', 'aubergine', 'beet', 'radish', 'leek', 'shallot',
        'scallion', 'green onion', 'spring onion', 'arugula', 'rocket', 'watercress',
        'endive', 'fennel bulb', 'artichoke', 'squash', 'sweet potato', 'yam', 'turnip',
        'parsnip', 'rutabaga', 'kohlrabi', 'jicama', 'tomatillo', 'jalapeño', 'jalapeno',
        'habanero', 'serrano', 'anaheim', 'poblano', 'chipotle pepper', 'bell pepper',
        'capsicum', 'ginger', 'turmeric root', 'herb', 'mint', 'sage', 'dill', 'chive',
        'thyme', 'rosemary', 'oregano', 'tarragon', 'bay', 'sorrel', 'purslane', 'mango',
        'papaya', 'pineapple', 'peach', 'plum', 'pear', 'grape', 'cherry', 'strawberry',
        'blueberry', 'raspberry', 'blackberry', 'watermelon', 'melon', 'cantaloupe', 'fig',
        'date', 'kiwi', 'pomegranate', 'persimmon', 'dragon fruit', 'passion fruit',
        'lychee', 'jackfruit',
    )),
]


def guess_category(name: str) -> str:
    """Return the shopping category for an ingredient name, or 'other'."""
    name_lower = name.lower()
    for category, pattern in CATEGORY_RULES:
        if pattern.search(name_lower):
            return category
    return 'other'
