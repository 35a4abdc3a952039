# neuralarch/nas_engine/chat_responder.py

from typing import List, Optional

from .topic_classifier import classify_topic, is_greeting, GENERAL

ASSISTANT_NAME = "NeuralArch Assistant"

GREETING = (
    f"Hi there! I'm the {ASSISTANT_NAME}, your guide to Neural Architecture Search. "
    "I can help with search configurations, architecture analysis and optimization strategies. "
    "What would you like to explore today?"
)

FOLLOW_UP = (
    "That's an interesting question! I specialize in neural architecture search and would like to "
    "help further. Could you share more details about what you're trying to achieve? I can assist "
    "with search strategies, architecture analysis, performance optimization or any other NAS topic."
)

INTRODUCTION = (
    f"Hello! I'm the {ASSISTANT_NAME}, specialized in Neural Architecture Search. I can help with:\n\n"
    "- Architecture search configuration\n"
    "- Model performance analysis\n"
    "- Search strategy optimization\n"
    "- Hardware-aware design\n"
    "- Multi-objective optimization\n\n"
    "What neural architecture challenge can I help you solve today?"
)

TOPIC_REPLIES = {
    "optimization": (
        "Let's optimize your architecture. The most effective levers are:\n\n"
        "- **Parameter efficiency**: depth-wise separable convolutions cut parameters 8-10x\n"
        "- **Latency**: inverted residual blocks for faster inference\n"
        "- **Compression**: pruning (20-40% of weights) and INT8 quantization\n"
        "- **Accuracy preservation**: knowledge distillation from a larger teacher model\n\n"
        "Which constraint matters most to you: accuracy, latency or model size?"
    ),
    "comparison": (
        "Comparing architectures means balancing several objectives:\n\n"
        "- **Accuracy**: Top-1 and Top-5 on the same validation split\n"
        "- **Efficiency**: FLOPs, parameters and memory footprint\n"
        "- **Latency**: inference time on the target hardware\n"
        "- **Pareto analysis**: keep only candidates no other candidate dominates\n\n"
        "Send me two or more architectures and I'll rank them."
    ),
    "performance": (
        "Performance evaluation in NAS covers multiple dimensions:\n\n"
        "- **Accuracy metrics**: Top-1, Top-5 accuracy, F1-score\n"
        "- **Efficiency metrics**: FLOPs, parameters, memory usage\n"
        "- **Latency**: inference time on target hardware\n"
        "- **Pareto optimization**: finding the best trade-offs\n\n"
        "What performance aspect are you trying to improve?"
    ),
    "hardware": (
        "Hardware-aware design starts from the deployment target:\n\n"
        "- **Mobile/edge**: MobileNetV3 or EfficientNet-B0 style blocks, INT8 quantization\n"
        "- **GPU**: mixed precision and larger batch sizes\n"
        "- **CPU**: distilled, shallower models with vectorized kernels\n\n"
        "What hardware are you deploying to?"
    ),
    "search": (
        "For Neural Architecture Search, consider these key factors:\n\n"
        "- **Search strategy**: evolutionary, reinforcement learning, Bayesian or gradient-based\n"
        "- **Search space**: define your architecture constraints\n"
        "- **Objective function**: balance accuracy, latency and model size\n"
        "- **Budget**: computational resources and time limits\n\n"
        "Which part of the search configuration should we work on?"
    ),
    "design": (
        "I can help you design neural architectures! Are you interested in:\n\n"
        "- Specific models like EfficientNet, ResNet or MobileNet?\n"
        "- Building blocks such as inverted residuals or squeeze-and-excitation?\n"
        "- Scaling width, depth and resolution together?\n\n"
        "What specific aspect would you like to dive into?"
    ),
    "troubleshooting": (
        "Let's track the problem down. Common NAS issues and first checks:\n\n"
        "- **Poor convergence**: lower the learning rate 10x, add batch normalization\n"
        "- **Exploding gradients**: gradient clipping, residual connections\n"
        "- **Out of memory**: smaller batches, gradient checkpointing\n"
        "- **Weak candidates**: widen the search space or improve the proxy task\n\n"
        "What error or behaviour are you seeing?"
    ),
    "dataset": (
        "Dataset choice shapes the search:\n\n"
        "- **CIFAR-10/100**: quick experiments and lightweight architectures\n"
        "- **ImageNet**: the standard benchmark for deeper models\n"
        "- **Custom data**: start with a proxy subset, then transfer\n"
        "- **Augmentation**: random crops, flips, Mixup/CutMix, AutoAugment\n\n"
        "Which dataset are you working with?"
    ),
}


def general_reply(prompt: str, history_length: int) -> str:
    if is_greeting(prompt):
        return GREETING
    if history_length > 1:
        return FOLLOW_UP
    return INTRODUCTION


def generate_chat_reply(prompt: str, history: Optional[List] = None) -> str:
    """Fixed reply for the prompt's topic"""
    topic = classify_topic(prompt)
    if topic == GENERAL:
        return general_reply(prompt, len(history or []))
    return TOPIC_REPLIES[topic]
