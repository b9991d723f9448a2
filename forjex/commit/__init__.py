"""Heuristic Commit Message Package"""

from forjex.commit.classifier import ChangeClassifier, ClassificationResult, TYPE_RULES
from forjex.commit.description import CommitMessage, DescriptionBuilder
from forjex.commit.synthesizer import CommitMessageSynthesizer

__all__ = [
    "ChangeClassifier",
    "ClassificationResult",
    "TYPE_RULES",
    "CommitMessage",
    "DescriptionBuilder",
    "CommitMessageSynthesizer",
]
