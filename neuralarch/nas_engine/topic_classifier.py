# neuralarch/nas_engine/topic_classifier.py

import re

# Checked in order against the lowercased prompt; first match wins.
TOPIC_PATTERNS = [
    ("optimization", re.compile(r"optim|improv|efficien|speed|fast|better|enhance")),
    ("comparison", re.compile(r"compar|vs|versus|differ|which|best|better")),
    ("performance", re.compile(r"accura|loss|metric|perform|evaluat|test|valid")),
    ("hardware", re.compile(r"mobile|edge|gpu|cpu|memor|latenc|power|deploy")),
    ("search", re.compile(r"search|nas|automl|evolution|reinforc|bayesian|gradient")),
    ("design", re.compile(r"layer|block|resnet|efficient|mobile|convol|dense|transform")),
    ("troubleshooting", re.compile(r"error|fail|problem|issue|debug|fix|help|stuck")),
    ("dataset", re.compile(r"dataset|data|imagenet|cifar|custom|train|augment")),
]

GENERAL = "general"

TOPICS = [name for name, _ in TOPIC_PATTERNS] + [GENERAL]

_GREETING = re.compile(r"\b(hello|hi|hey)\b")


def classify_topic(prompt: str) -> str:
    """Topic bucket for a user prompt, ``general`` when nothing matches"""
    text = (prompt or "").lower()
    for topic, pattern in TOPIC_PATTERNS:
        if pattern.search(text):
            return topic
    return GENERAL


def is_greeting(prompt: str) -> bool:
    return bool(_GREETING.search((prompt or "").lower()))
