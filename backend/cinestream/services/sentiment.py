"""
Review comment sentiment classifiers
"""
from enum import Enum
from typing import Iterable, Optional, Tuple
import logging
from textblob import TextBlob

from cinestream.utils.exceptions import InvalidInput

logger = logging.getLogger(__name__)


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


POSITIVE_WORDS: Tuple[str, ...] = (
    "amazing", "love", "great", "excellent", "awesome", "good", "best",
    "recommended", "brilliant", "fantastic", "wonderful", "perfect",
    "outstanding", "masterpiece", "enjoyed",
)

NEGATIVE_WORDS: Tuple[str, ...] = (
    "bad", "terrible", "awful", "boring", "disappointing", "poor", "worst",
    "waste", "horrible", "hate", "dislike", "rubbish", "garbage", "trash",
)


class KeywordSentimentClassifier:
    """
    Lexical heuristic: lower-cased substring match against two word lists.

    Only one-sided matches are decisive; a comment hitting both lists (or
    neither) is neutral. Sarcasm and negation ("not good") are misread, which
    is accepted for this classifier.
    """

    def __init__(
        self,
        positive_words: Iterable[str] = POSITIVE_WORDS,
        negative_words: Iterable[str] = NEGATIVE_WORDS
    ):
        self.positive_words = tuple(word.lower() for word in positive_words)
        self.negative_words = tuple(word.lower() for word in negative_words)

    def classify(self, comment: Optional[str]) -> Sentiment:
        text = (comment or "").lower()
        has_positive = any(word in text for word in self.positive_words)
        has_negative = any(word in text for word in self.negative_words)

        if has_positive and not has_negative:
            return Sentiment.POSITIVE
        if has_negative and not has_positive:
            return Sentiment.NEGATIVE
        return Sentiment.NEUTRAL


class TextBlobSentimentClassifier:
    """Polarity-based classifier backed by TextBlob's pattern lexicon"""

    def __init__(self, threshold: float = 0.1):
        self.threshold = threshold

    def classify(self, comment: Optional[str]) -> Sentiment:
        text = (comment or "").strip()
        if not text:
            return Sentiment.NEUTRAL

        polarity = TextBlob(text).sentiment.polarity
        if polarity > self.threshold:
            return Sentiment.POSITIVE
        if polarity < -self.threshold:
            return Sentiment.NEGATIVE
        return Sentiment.NEUTRAL


default_classifier = KeywordSentimentClassifier()


def get_classifier(name: str = "keyword"):
    """Classifier factory keyed by the SENTIMENT_BACKEND setting"""
    if name == "keyword":
        return default_classifier
    if name == "textblob":
        return TextBlobSentimentClassifier()
    raise InvalidInput(f"Unknown sentiment backend: {name}")
