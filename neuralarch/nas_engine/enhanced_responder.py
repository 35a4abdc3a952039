# neuralarch/nas_engine/enhanced_responder.py

"""
Long-form assistant replies with insights, suggestions and visualization hints.

Same topic buckets as the basic chat; each topic contributes a guide text,
one insight, optional suggestions and optional visualization descriptors.
"""

from typing import Any, Dict, List, Optional

from .chat_responder import ASSISTANT_NAME
from .topic_classifier import classify_topic, is_greeting, GENERAL

UNIVERSAL_SUGGESTIONS = [
    "Explore the architecture leaderboard for inspiration",
    "Use the performance visualization tools",
]

TOPIC_GUIDES = {
    "optimization": """**Architecture Optimization**

Here's how I'd approach optimizing your neural architecture.

**Key strategies:**
- **Parameter efficiency**: depth-wise separable convolutions reduce parameters by 8-10x
- **Latency**: MobileNet-style inverted residuals for faster inference
- **Memory**: gradient checkpointing and mixed precision training
- **Accuracy preservation**: knowledge distillation keeps performance while compressing

**Immediate actions:**
1. Profile the current architecture to find computational bottlenecks
2. Prune 20-40% of parameters with minimal accuracy loss
3. Quantize to INT8 for up to 4x faster inference
4. Run an evolutionary search over the remaining configuration space

**Expected improvements:** 2-5x faster inference, 50-80% fewer parameters, under 2% accuracy loss.

Would you like me to analyze a specific architecture?""",

    "comparison": """**Architecture Comparison**

**Comparison framework:**
- **Accuracy**: Top-1, Top-5 and F1-score on shared validation sets
- **Efficiency**: FLOPs, parameters and memory footprint
- **Latency**: inference time on the target CPU, GPU or mobile device
- **Energy**: power draw for sustainable deployment

**Multi-objective evaluation:**
1. Pareto frontier analysis for accuracy/efficiency trade-offs
2. Hardware-specific benchmarks on the actual deployment target
3. Robustness testing under shifted inputs
4. Scalability across input resolutions

**Rules of thumb:** EfficientNets excel on mobile, ResNets are reliable baselines,
Vision Transformers lead at large scale, MobileNets win on ultra-low latency.

What's your primary constraint: accuracy, speed, model size or power?""",

    "performance": """**Performance Analysis**

**Accuracy metrics:** Top-1 and Top-5 accuracy, mAP for detection, precision/recall/F1,
cross-validation consistency.

**Efficiency metrics:** FLOPs, parameter count and model size, memory bandwidth,
hardware throughput.

**Latency analysis:** forward pass timing on target hardware, batch efficiency,
real-time capability.

**Deeper insights:**
- Convergence analysis of training dynamics
- Generalization gap between train and validation
- Robustness under adversarial inputs
- Calibration of confidence against accuracy

**Recommendations:** dynamic inference, early-exit networks, FP16/INT8 precision,
batch size tuning.

Which performance aspect should we analyze in detail?""",

    "hardware": """**Hardware-Aware Optimization**

**Mobile/edge:** MobileNetV3 or EfficientNet-B0 on ARM, INT8 quantization,
pruning for memory limits.

**GPU:** mixed precision (FP16/BF16), tensor parallelism for large models,
gradient checkpointing.

**CPU-only:** AVX/SSE utilization, distillation into smaller architectures,
ONNX Runtime optimizations.

**Cloud/server:** multi-GPU scaling, model serving optimizations, autoscaling.

**Profiling tools:** TensorRT for NVIDIA GPUs, CoreML for Apple Silicon,
OpenVINO for Intel processors, TFLite for mobile.

**Expected gains:** 3-10x inference speedup and 50-90% memory reduction.

What's your target deployment hardware?""",

    "search": """**Neural Architecture Search Strategies**

**Evolutionary algorithms:** population-based, explore diverse architectures and
handle multiple objectives naturally.

**Reinforcement learning:** a controller network proposes architectures; efficient
for large spaces but needs careful reward design (NASNet, ProxylessNAS).

**Gradient-based methods:** differentiable search (DARTS) converges fast but is
memory intensive.

**Bayesian optimization:** sample efficient when each evaluation is expensive.

**Search space design:** macro topology, micro cell design, compound
width/depth/resolution scaling, hardware-aware constraints.

**Acceleration:** proxy tasks, weight sharing, early stopping, multi-fidelity evaluation.

Which search strategy interests you most?""",

    "design": """**Architecture Design Principles**

**Building blocks:** start from proven components (ResNet, MobileNet blocks) and
compose larger networks from simple, modular units.

**Efficient computation patterns:**
- Inverted residuals: expand, process, compress
- Separable convolutions: split spatial and channel mixing
- Attention: focus compute where it matters

**Scaling:** balance width, depth and input resolution together (compound scaling).

**Information flow:** skip connections for gradients, multi-scale feature fusion,
bottlenecks for efficiency.

**Practical guidelines:**
1. Start simple and add complexity gradually
2. Profile from the beginning
3. Regularize deep networks
4. Validate design choices empirically

What type of architecture are you designing?""",

    "troubleshooting": """**NAS Troubleshooting**

**Training issues:**
- Vanishing gradients: skip connections, proper initialization
- Exploding gradients: gradient clipping, lower learning rate
- Poor convergence: check preprocessing, try another optimizer
- Overfitting: regularization, augmentation, early stopping

**Search problems:**
- Weak candidates: expand the search space, improve evaluation
- Slow convergence: progressive training, weight sharing
- Local optima: multiple runs with different seeds

**Performance issues:**
- High latency: profile bottlenecks, apply compression
- Memory errors: smaller batches, gradient checkpointing

**Quick fixes:** reduce the learning rate 10x, add batch normalization, use proven
blocks, simplify the search space.

What specific issue are you running into?""",

    "dataset": """**Dataset Strategy for NAS**

**Benchmarks:** ImageNet (1000 classes, 1.2M images), CIFAR-10/100 for quick
experiments, MS COCO for detection, custom datasets for domain work.

**Impact on the search:** larger datasets favour deeper models, more classes need
more capacity, higher resolution needs more compute.

**Preparation:** normalization, consistent resizing, train/validation/test splits,
multiple random seeds.

**Augmentation:** random crops and flips, color jitter, Mixup/CutMix, AutoAugment.

**Proxy tasks:** search on a smaller subset, then transfer to the full dataset.

Which dataset are you working with?""",
}

TOPIC_INSIGHTS = {
    "optimization": ("optimization", "Architecture Optimization Opportunities",
                     "Based on your query, I can help identify bottlenecks and suggest improvements", 0.9),
    "comparison": ("analysis", "Multi-Objective Analysis",
                   "Comparing architectures requires balancing accuracy, efficiency and constraints", 0.85),
    "performance": ("analysis", "Performance Metrics Analysis",
                    "Understanding performance requires evaluation across multiple metrics", 0.88),
    "hardware": ("optimization", "Hardware-Aware Optimization",
                 "Optimizing for specific hardware constraints is crucial for deployment", 0.92),
    "search": ("suggestion", "Search Strategy Selection",
               "Different search strategies excel in different scenarios", 0.86),
    "design": ("suggestion", "Architecture Design Principles",
               "Following proven design patterns improves success rate", 0.87),
    "troubleshooting": ("warning", "Common Issues Detected",
                        "Let me help diagnose and fix common NAS problems", 0.83),
    "dataset": ("analysis", "Dataset Considerations",
                "Dataset choice significantly impacts architecture search results", 0.89),
}

TOPIC_SUGGESTIONS = {
    "optimization": [
        "Run architecture profiling to identify bottlenecks",
        "Consider knowledge distillation for model compression",
        "Implement progressive training strategies",
    ],
    "hardware": [
        "Profile on target hardware",
        "Use hardware-specific optimizations",
    ],
}

TOPIC_VISUALIZATIONS = {
    "comparison": {
        "type": "pareto_front",
        "title": "Accuracy vs Efficiency Trade-off",
        "description": "Pareto frontier showing optimal trade-offs",
    },
    "performance": {
        "type": "metrics_dashboard",
        "title": "Performance Dashboard",
        "description": "Comprehensive view of all performance metrics",
    },
}

ENHANCED_GREETING = f"""**Hello! I'm the {ASSISTANT_NAME}**

I'm here to help with every part of Neural Architecture Search.

**What I can do:**
- **Architecture analysis**: performance insights and optimization suggestions
- **Search strategy guidance**: pick the right algorithm for your constraints
- **Hardware optimization**: deploy efficiently on mobile, edge and cloud
- **Troubleshooting**: debug training, convergence and performance issues

What neural architecture challenge would you like to tackle together?"""

ENHANCED_FOLLOW_UP = """That's a great question! I can give detailed guidance on architecture design
and analysis, performance optimization, search strategy selection, deployment on
specific hardware and evaluation metrics.

Could you share more details about your specific challenge?"""

ENHANCED_INTRODUCTION = f"""**Welcome to the {ASSISTANT_NAME}**

I specialize in neural architecture search and optimization:
- **Evolutionary and gradient-based search**: choosing the right strategy
- **Multi-objective optimization**: balancing accuracy, speed and efficiency
- **Hardware-aware design**: mobile, edge and cloud deployment
- **Performance analysis**: metrics and actionable insights

What challenge shall we solve first?"""


def _insight(kind: str, title: str, description: str, confidence: float) -> Dict[str, Any]:
    return {
        "type": kind,
        "title": title,
        "description": description,
        "confidence": confidence,
        "actionable": True,
    }


def _general_text(prompt: str, history_length: int) -> str:
    if is_greeting(prompt):
        return ENHANCED_GREETING
    if history_length > 1:
        return ENHANCED_FOLLOW_UP
    return ENHANCED_INTRODUCTION


def generate_enhanced_reply(prompt: str, history: Optional[List] = None,
                            context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Reply text plus insights, de-duplicated suggestions and visualizations"""
    topic = classify_topic(prompt)
    insights = []
    suggestions = []
    visualizations = []

    if topic == GENERAL:
        text = _general_text(prompt, len(history or []))
    else:
        text = TOPIC_GUIDES[topic]
        insights.append(_insight(*TOPIC_INSIGHTS[topic]))
        suggestions.extend(TOPIC_SUGGESTIONS.get(topic, []))
        if topic in TOPIC_VISUALIZATIONS:
            visualizations.append(dict(TOPIC_VISUALIZATIONS[topic]))

    current_experiment = (context or {}).get("currentExperiment")
    if current_experiment:
        insights.append(_insight(
            "analysis",
            "Current Experiment Status",
            f"Analyzing experiment: {current_experiment}",
            0.95,
        ))

    suggestions.extend(UNIVERSAL_SUGGESTIONS)

    return {
        "topic": topic,
        "text": text,
        "insights": insights,
        # order-preserving de-duplication
        "suggestions": list(dict.fromkeys(suggestions)),
        "visualizations": visualizations,
    }
