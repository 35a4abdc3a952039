# Import all models to ensure proper relationship configuration
from .enums import SearchStrategy, DatasetType, ArchitectureStatus, MessageRole
from .experiment import SearchExperiment
from .architecture import NeuralArchitecture, ArchitectureLayer
from .progress import SearchProgress
from .conversation import AiConversation
from .profile import UserProfile

# Export all models
__all__ = [
    "SearchStrategy",
    "DatasetType",
    "ArchitectureStatus",
    "MessageRole",
    "SearchExperiment",
    "NeuralArchitecture",
    "ArchitectureLayer",
    "SearchProgress",
    "AiConversation",
    "UserProfile",
]
