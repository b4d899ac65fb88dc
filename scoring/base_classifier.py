"""
Base Category Classifier

Abstract base class for the three category classifiers.
Each classifier turns one product's detection report into a scored breakdown.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from scoring.detection.models import DetectionReport
from scoring.models import Category, ClassificationResult, IngredientToken, ProductInput
from scoring.tables.models import ScoringTables


class BaseClassifier(ABC):
    """
    Base class for all category classifiers.

    Each classifier:
    - Handles exactly one Category
    - Reads only the table snapshot it is given
    - Returns a frozen ClassificationResult variant with a 0-100 score
    """

    category: Category

    @abstractmethod
    def classify(
        self,
        product: ProductInput,
        tokens: Sequence[IngredientToken],
        report: DetectionReport,
        tables: ScoringTables,
    ) -> ClassificationResult:
        """
        Classify one product.

        Args:
            product: Validated product input
            tokens: Normalized ingredient tokens
            report: Detector output for this product
            tables: Table snapshot for this analysis

        Returns:
            The category-specific ClassificationResult
        """
        pass
