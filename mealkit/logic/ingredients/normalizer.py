"""Ingredient name normalization and matching.

normalize() turns a free-text ingredient ("2 cups Fresh Tomatoes") into a
comparison key ("tomato"). Two names are considered the same ingredient when
their keys are equal, when they resolve to the same entry of the synonym
graph, or, as an approximate fallback, when one key contains the other.
"""
from __future__ import annotations
import re
from typing import Dict, Iterable, List, Optional, Set

__all__ = [
    "normalize", "canonical_name", "match_kind", "names_match", "find_best_match",
    "unique_keys", "SYNONYM_GROUPS", "MATCH_EXACT", "MATCH_SYNONYM", "MATCH_SUBSTRING",
]

MATCH_EXACT = "exact"
MATCH_SYNONYM = "synonym"
MATCH_SUBSTRING = "substring"

_QUANTITY_TOKEN = re.compile(r'^[\d./\-½¼¾⅓⅔⅛⅜⅝⅞]+$')
_SPACES = re.compile(r'\s+')

_UNIT_WORDS = {
    'cup', 'cups', 'tablespoon', 'tablespoons', 'tbsp', 'teaspoon', 'teaspoons', 'tsp',
    'ounce', 'ounces', 'oz', 'pound', 'pounds', 'lb', 'lbs',
    'gram', 'grams', 'g', 'kilogram', 'kilograms', 'kg',
    'milliliter', 'milliliters', 'ml', 'liter', 'liters', 'l',
    'piece', 'pieces', 'clove', 'cloves', 'can', 'cans',
    'small', 'medium', 'large', 'whole',
}

_DESCRIPTORS = {
    'fresh', 'frozen', 'dried', 'canned', 'cooked', 'raw', 'organic',
    'chopped', 'diced', 'minced', 'sliced', 'shredded', 'grated',
    'peeled', 'trimmed', 'boneless', 'skinless',
}

# Irregular plurals and words the suffix rules would mangle
_SINGULARS = {
    'leaves': 'leaf', 'loaves': 'loaf', 'halves': 'half',
    'cookies': 'cookie', 'brownies': 'brownie', 'chives': 'chive',
    'anchovies': 'anchovy', 'berries': 'berry', 'cherries': 'cherry',
}
_KEEP_PLURAL = {'molasses', 'hummus', 'couscous', 'asparagus', 'swiss', 'grits', 'series'}

# Alternate spellings and regional names, keyed by their singular form
_ALIASES = {
    'scallion': 'green onion',
    'spring onion': 'green onion',
    'garbanzo bean': 'chickpea',
    'ap flour': 'all-purpose flour',
    'all purpose flour': 'all-purpose flour',
    'plain flour': 'all-purpose flour',
    'evoo': 'extra virgin olive oil',
    'soya sauce': 'soy sauce',
    'capsicum': 'bell pepper',
    'sweet pepper': 'bell pepper',
    'prawn': 'shrimp',
    'courgette': 'zucchini',
    'aubergine': 'eggplant',
    'coriander leaf': 'cilantro',
    'icing sugar': 'powdered sugar',
    'confectioners sugar': 'powdered sugar',
    'minced beef': 'ground beef',
    'hamburger meat': 'ground beef',
    'nam pla': 'fish sauce',
    'parmigiano': 'parmesan',
    'parmigiano reggiano': 'parmesan',
    'yoghurt': 'yogurt',
    'chilli': 'chili',
}

# Canonical ingredient -> names that denote the same thing on a shopping trip
SYNONYM_GROUPS: Dict[str, Set[str]] = {
    'chicken breast': {'chicken', 'poultry', 'chicken meat'},
    'chicken': {'chicken breast', 'poultry', 'chicken meat'},
    'ground beef': {'beef', 'ground meat'},
    'beef': {'ground beef', 'beef meat'},
    'pork': {'pork chop', 'pork meat', 'pork shoulder'},
    'shrimp': {'shrimps'},
    'salmon': {'salmon fillet'},
    'onion': {'yellow onion', 'white onion'},
    'garlic': {'garlic clove'},
    'tomato': {'roma tomato'},
    'bell pepper': {'red bell pepper', 'green bell pepper'},
    'broccoli': {'broccoli floret'},
    'mushroom': {'button mushroom'},
    'rice': {'white rice', 'long grain rice'},
    'pasta': {'spaghetti', 'penne', 'noodle', 'linguine'},
    'flour': {'all-purpose flour'},
    'bread': {'sandwich bread', 'white bread'},
    'cheese': {'cheddar cheese', 'cheddar'},
    'parmesan': {'parmesan cheese'},
    'mozzarella': {'mozzarella cheese'},
    'feta': {'feta cheese'},
    'milk': {'whole milk', 'dairy milk'},
    'butter': {'unsalted butter', 'salted butter'},
    'olive oil': {'extra virgin olive oil'},
    'vegetable oil': {'cooking oil', 'canola oil'},
    'soy sauce': {'tamari'},
    'crushed tomato': {'tomato puree', 'tomato sauce'},
    'black bean': {'canned black bean'},
    'chickpea': {'canned chickpea'},
    'kidney bean': {'red bean'},
    'basil': {'basil leaf'},
    'parsley': {'italian parsley'},
    'cumin': {'ground cumin', 'cumin powder'},
    'paprika': {'sweet paprika', 'paprika powder'},
}


def _build_group_index(groups: Dict[str, Set[str]]) -> Dict[str, Set[str]]:
    index: Dict[str, Set[str]] = {}
    for head, members in groups.items():
        index.setdefault(head, set()).add(head)
        for member in members:
            index.setdefault(member, set()).add(head)
    return index


_GROUP_INDEX = _build_group_index(SYNONYM_GROUPS)


def _singular(word: str) -> str:
    if word in _SINGULARS:
        return _SINGULARS[word]
    if word in _KEEP_PLURAL or len(word) <= 3:
        return word
    if word.endswith('ies') and len(word) > 4:
        return word[:-3] + 'y'   # berries -> berry
    if word.endswith('oes'):
        return word[:-2]         # tomatoes -> tomato
    if word.endswith(('ches', 'shes', 'xes')):
        return word[:-2]         # peaches -> peach
    if word.endswith('s') and not word.endswith(('ss', 'us', 'is')):
        return word[:-1]
    return word


def _normalize_once(text: str) -> str:
    words = _SPACES.sub(' ', text.strip().lower()).split(' ')
    words = [w for w in words if w]
    # Leading quantities and units ("2 1/2 cups ..."); the last word is always kept
    while len(words) > 1 and (_QUANTITY_TOKEN.match(words[0]) or words[0] in _UNIT_WORDS):
        words.pop(0)
    kept = [w.strip(',;:') for w in words if w.strip(',;:') not in _DESCRIPTORS]
    kept = [w for w in kept if w]
    if kept:
        words = kept
    phrase = ' '.join(_singular(w) for w in words)
    return _ALIASES.get(phrase, phrase)


def normalize(name) -> str:
    """Return the comparison key for an ingredient name ('' for non-strings)."""
    if not isinstance(name, str):
        return ''
    current = name
    for _ in range(6):
        nxt = _normalize_once(current)
        if nxt == current:
            break
        current = nxt
    return current


def canonical_name(name: str) -> str:
    """Head of the synonym group the name belongs to, or its own key."""
    key = normalize(name)
    if key in SYNONYM_GROUPS:
        return key
    heads = _GROUP_INDEX.get(key)
    if heads:
        return sorted(heads)[0]
    return key


def _share_group(key_a: str, key_b: str) -> bool:
    heads_a = _GROUP_INDEX.get(key_a)
    heads_b = _GROUP_INDEX.get(key_b)
    if not heads_a or not heads_b:
        return False
    return bool(heads_a & heads_b)


def match_kind(a: str, b: str) -> Optional[str]:
    """Classify how two ingredient names match: exact, synonym, substring or None.

    Substring matching is deliberately loose ("onion" matches "green onion")
    and is not scoped to word boundaries, so "pea" also matches "peach".
    """
    key_a, key_b = normalize(a), normalize(b)
    if not key_a or not key_b:
        return None
    if key_a == key_b:
        return MATCH_EXACT
    if _share_group(key_a, key_b):
        return MATCH_SYNONYM
    if key_a in key_b or key_b in key_a:
        return MATCH_SUBSTRING
    return None


def names_match(a: str, b: str) -> bool:
    return match_kind(a, b) is not None


def find_best_match(name: str, candidates: Iterable[str]) -> Optional[int]:
    """Index of the best matching candidate: first exact, else synonym, else substring."""
    best: Dict[str, int] = {}
    for idx, candidate in enumerate(candidates):
        kind = match_kind(name, candidate)
        if kind is None or kind in best:
            continue
        if kind == MATCH_EXACT:
            return idx
        best[kind] = idx
    for kind in (MATCH_SYNONYM, MATCH_SUBSTRING):
        if kind in best:
            return best[kind]
    return None


def unique_keys(names: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for n in names:
        key = normalize(n)
        if key and key not in seen:
            seen.append(key)
    return seen
