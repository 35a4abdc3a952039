# neuralarch/models/enums.py

import enum


class SearchStrategy(str, enum.Enum):
    EVOLUTIONARY = "evolutionary"
    REINFORCEMENT = "reinforcement"
    GRADIENT = "gradient"
    BAYESIAN = "bayesian"
    RANDOM = "random"


class DatasetType(str, enum.Enum):
    IMAGENET = "imagenet"
    CIFAR10 = "cifar10"
    CIFAR100 = "cifar100"
    CUSTOM = "custom"


class ArchitectureStatus(str, enum.Enum):
    PENDING = "pending"
    TRAINING = "training"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class MessageRole(str, enum.Enum):
    USER = "user"
    AI = "ai"


def enum_values(enum_cls):
    """Store enum values ("cifar10"), not member names ("CIFAR10")"""
    return [member.value for member in enum_cls]
