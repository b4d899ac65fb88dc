"""
Category -> classifier mapping

One canonical classifier per category, selected by the validated category.
"""

from typing import Dict

from scoring.base_classifier import BaseClassifier
from scoring.cosmetics.classifier import CosmeticClassifier
from scoring.detergents.classifier import DetergentClassifier
from scoring.food.classifier import FoodClassifier
from scoring.models import Category

CLASSIFIERS: Dict[Category, BaseClassifier] = {
    Category.FOOD: FoodClassifier(),
    Category.COSMETICS: CosmeticClassifier(),
    Category.DETERGENTS: DetergentClassifier(),
}


def classifier_for(category: Category) -> BaseClassifier:
    return CLASSIFIERS[Category(category)]
