# neuralarch/nas_engine/external_ai.py

"""
Simulated calls to third-party AI providers.

No network request is made. Each provider returns canned text, a confidence
and token/cost metadata; OpenAI varies its payload by task.
"""

import time
from typing import Any, Dict, List, Optional, Tuple

SERVICES = ("openai", "anthropic", "cohere", "huggingface", "replicate")
TASKS = ("code_generation", "architecture_analysis", "optimization_suggestions", "research_synthesis")

DEFAULT_MODELS = {
    "openai": "gpt-4",
    "anthropic": "claude-3-sonnet",
    "cohere": "command-r-plus",
    "huggingface": "microsoft/DialoGPT-large",
    "replicate": "meta/llama-2-70b-chat",
}

# task -> (tokens, cost estimate in USD, confidence)
OPENAI_TASK_USAGE = {
    "code_generation": (1500, 0.03, 0.92),
    "architecture_analysis": (1200, 0.024, 0.88),
    "optimization_suggestions": (1800, 0.036, 0.91),
    "research_synthesis": (2000, 0.04, 0.85),
}

PROVIDER_PROFILES = {
    "anthropic": {
        "tokens": 1600, "cost": 0.032, "confidence": 0.89,
        "text": ("Claude analysis for {task}: Advanced neural architecture insights with focus on safety "
                 "and robustness. Considering architectural patterns that promote interpretability and "
                 "reduced failure modes."),
        "suggestions": [
            "Implement uncertainty quantification in architecture predictions",
            "Use robust training procedures to prevent adversarial vulnerabilities",
            "Consider interpretable architecture components for production deployment",
        ],
    },
    "cohere": {
        "tokens": 1400, "cost": 0.028, "confidence": 0.86,
        "text": ("Cohere analysis for {task}: Focusing on retrieval-augmented generation for neural "
                 "architecture search. Leveraging large-scale architecture databases for informed suggestions."),
        "suggestions": [
            "Use retrieval-augmented architecture search",
            "Implement semantic similarity for architecture matching",
            "Apply few-shot learning for rapid architecture adaptation",
        ],
    },
    "huggingface": {
        "tokens": 1300, "cost": 0.0, "confidence": 0.83,
        "text": ("HuggingFace analysis using {model}: Open-source neural architecture insights with "
                 "transformer-based analysis. Leveraging community models for specialized NAS tasks."),
        "suggestions": [
            "Explore transformer architectures for your use case",
            "Use pre-trained components to accelerate development",
            "Implement transfer learning from vision transformers",
        ],
    },
    "replicate": {
        "tokens": 1500, "cost": 0.025, "confidence": 0.87,
        "text": ("Replicate analysis using {model}: Cloud-based neural architecture optimization with "
                 "scalable inference. Focus on practical deployment and real-world performance."),
        "suggestions": [
            "Use cloud-native architecture optimization",
            "Implement distributed training strategies",
            "Consider edge deployment optimizations",
        ],
    },
}

ANALYSIS_SUGGESTIONS = [
    "Consider adding residual connections for better gradient flow",
    "Implement attention mechanisms for improved feature selection",
    "Use progressive training for faster convergence",
]

OPTIMIZATION_SUGGESTIONS = [
    "Apply knowledge distillation to reduce model size",
    "Use mixed precision training for 2x speedup",
    "Implement dynamic inference for variable complexity",
    "Consider neural ODE for continuous architectures",
]

DEFAULT_MODEL_CODE = '''import torch
import torch.nn as nn


class SearchedNet(nn.Module):
    def __init__(self, num_classes=1000):
        super().__init__()

        # Efficient backbone with compound scaling
        self.backbone = nn.Sequential(
            nn.Conv2d(3, 32, 3, padding=1),
            nn.BatchNorm2d(32),
            nn.ReLU(inplace=True),

            # MobileNet-style inverted residuals
            self._make_inverted_residual(32, 64, 2, 6),
            self._make_inverted_residual(64, 128, 2, 6),
            self._make_inverted_residual(128, 256, 2, 6),

            nn.AdaptiveAvgPool2d((1, 1))
        )

        self.classifier = nn.Sequential(
            nn.Dropout(0.2),
            nn.Linear(256, num_classes)
        )

    def _make_inverted_residual(self, in_channels, out_channels, stride, expand_ratio):
        hidden = in_channels * expand_ratio
        return nn.Sequential(
            nn.Conv2d(in_channels, hidden, 1),
            nn.BatchNorm2d(hidden),
            nn.ReLU6(inplace=True),
            nn.Conv2d(hidden, hidden, 3, stride=stride, padding=1, groups=hidden),
            nn.BatchNorm2d(hidden),
            nn.ReLU6(inplace=True),
            nn.Conv2d(hidden, out_channels, 1),
            nn.BatchNorm2d(out_channels)
        )

    def forward(self, x):
        x = self.backbone(x)
        x = x.view(x.size(0), -1)
        return self.classifier(x)


def create_training_config():
    return {
        'optimizer': 'AdamW',
        'lr': 0.001,
        'weight_decay': 0.01,
        'lr_schedule': 'cosine_annealing',
        'batch_size': 64,
        'epochs': 100,
        'augmentation': 'autoaugment',
        'mixed_precision': True
    }
'''

OPTIMIZATION_ADVICE = """**Optimization Recommendations**

Based on your performance data and constraints:

**Primary optimizations:**
- **Model compression**: structured pruning removes 40-60% of parameters
- **Knowledge distillation**: transfer knowledge from a larger teacher model
- **Quantization**: INT8 conversion for up to 4x inference speedup
- **Architecture search**: evolutionary algorithms to find better configurations

**Training improvements:**
- Progressive resizing from low to full resolution
- FP16 mixed precision for 2x memory efficiency
- Gradient accumulation to simulate larger batches

**Hardware-specific:**
- ONNX Runtime for portable optimized inference
- TensorRT on NVIDIA GPUs (3-5x speedup)
- CoreML on Apple Silicon, OpenVINO on Intel

**Expected results:** 2-5x faster inference, 50-80% smaller models, under 3% accuracy loss.

Start with quantization and progressive training for immediate gains."""

RESEARCH_SYNTHESIS = """**Research Synthesis: Neural Architecture Search**

**Key developments:**
- Differentiable NAS (GDAS, PC-DARTS) cuts search time by orders of magnitude
- Hardware-aware search folds latency, memory and energy into the objective
- Once-for-All supernets specialize to new targets without retraining
- NAS methods adapted to vision transformers

**Emerging trends:**
- Attention-based search strategies
- Multi-modal architectures optimized jointly
- Energy-efficient, sustainable architecture design

**Practical applications:**
- AutoML platforms with integrated NAS
- Mobile-first architecture optimization
- Domain-specific architecture templates"""


def _layer_to_module(layer: Dict[str, Any], in_channels: int) -> Tuple[List[str], int]:
    """PyTorch constructor lines for one layer descriptor plus the channels it outputs"""
    layer_type = layer.get("type")
    if layer_type == "conv2d":
        filters = layer.get("filters") or 32
        kernel = layer.get("kernel_size") or 3
        if layer.get("separable"):
            lines = [
                f"nn.Conv2d({in_channels}, {in_channels}, {kernel}, padding={kernel // 2}, groups={in_channels}),",
                f"nn.Conv2d({in_channels}, {filters}, 1),",
            ]
        else:
            lines = [f"nn.Conv2d({in_channels}, {filters}, {kernel}, padding={kernel // 2}),"]
        activation = layer.get("activation")
        if activation == "swish":
            lines.append("nn.SiLU(inplace=True),")
        elif activation == "gelu":
            lines.append("nn.GELU(),")
        elif activation == "hard_swish":
            lines.append("nn.Hardswish(inplace=True),")
        else:
            lines.append("nn.ReLU(inplace=True),")
        return lines, filters
    if layer_type == "depthwise_conv":
        kernel = layer.get("kernel_size") or 3
        return [f"nn.Conv2d({in_channels}, {in_channels}, {kernel}, padding={kernel // 2}, groups={in_channels}),"], in_channels
    if layer_type == "batch_norm":
        return [f"nn.BatchNorm2d({in_channels}),"], in_channels
    if layer_type == "dropout":
        return [f"nn.Dropout({round(layer.get('rate') or 0.2, 3)}),"], in_channels
    if layer_type in ("pooling", "max_pool"):
        return ["nn.MaxPool2d(2),"], in_channels
    if layer_type == "global_avg_pool":
        return ["nn.AdaptiveAvgPool2d((1, 1)),", "nn.Flatten(),"], in_channels
    if layer_type == "dense":
        units = layer.get("units") or 128
        return [f"nn.LazyLinear({units}),"], units
    return [f"# unsupported layer type: {layer_type}"], in_channels


def render_pytorch_module(architecture: Optional[Dict[str, Any]]) -> str:
    """PyTorch source for the architecture's layer list, or a reference network"""
    layers = (architecture or {}).get("layers") or []
    if not layers:
        return DEFAULT_MODEL_CODE

    body = []
    channels = 3
    for layer in layers:
        lines, channels = _layer_to_module(layer, channels)
        body.extend(lines)

    name = (architecture or {}).get("name") or "GeneratedArchitecture"
    class_name = "".join(char for char in name.title() if char.isalnum()) or "GeneratedArchitecture"
    if class_name[0].isdigit():
        class_name = f"Net{class_name}"
    layer_lines = "\n".join(f"            {line}" for line in body)
    return (
        "import torch\n"
        "import torch.nn as nn\n\n\n"
        f"class {class_name}(nn.Module):\n"
        "    def __init__(self):\n"
        "        super().__init__()\n"
        "        self.layers = nn.Sequential(\n"
        f"{layer_lines}\n"
        "        )\n\n"
        "    def forward(self, x):\n"
        "        return self.layers(x)\n"
    )


def analyze_architecture(architecture: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "complexity_score": 0.75,
        "efficiency_rating": "High",
        "bottlenecks": [
            "Dense layers in final stages may cause memory issues",
            "Lack of skip connections limits gradient flow",
        ],
        "strengths": [
            "Well-balanced depth and width",
            "Appropriate use of batch normalization",
            "Efficient convolution patterns",
        ],
        "optimization_potential": 0.85,
        "deployment_readiness": "Good",
        "recommended_improvements": [
            "Add residual connections",
            "Implement progressive training",
            "Consider attention mechanisms",
        ],
    }


def _openai_result(task: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    confidence = OPENAI_TASK_USAGE[task][2]
    if task == "code_generation":
        return {"code": render_pytorch_module(payload.get("architecture")), "confidence": confidence}
    if task == "architecture_analysis":
        return {
            "analysis": analyze_architecture(payload.get("architecture")),
            "suggestions": list(ANALYSIS_SUGGESTIONS),
            "confidence": confidence,
        }
    if task == "optimization_suggestions":
        return {"text": OPTIMIZATION_ADVICE, "suggestions": list(OPTIMIZATION_SUGGESTIONS), "confidence": confidence}
    return {"text": RESEARCH_SYNTHESIS, "confidence": confidence}


def call_external_ai(service: Optional[str], task: Optional[str], payload: Optional[Dict[str, Any]],
                     parameters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    if not service or not task or payload is None:
        raise ValueError("Missing required parameters: service, task, input")
    if service not in SERVICES:
        raise ValueError(f"Unsupported service. Supported: {', '.join(SERVICES)}")
    if task not in TASKS:
        raise ValueError(f"Unsupported task: {task}. Supported: {', '.join(TASKS)}")

    started = time.perf_counter()
    model = (parameters or {}).get("model") or DEFAULT_MODELS[service]

    if service == "openai":
        tokens, cost, _ = OPENAI_TASK_USAGE[task]
        result = _openai_result(task, payload)
    else:
        profile = PROVIDER_PROFILES[service]
        tokens, cost = profile["tokens"], profile["cost"]
        result = {
            "text": profile["text"].format(task=task, model=model),
            "suggestions": list(profile["suggestions"]),
            "confidence": profile["confidence"],
        }

    return {
        "success": True,
        "service": service,
        "task": task,
        "result": result,
        "metadata": {
            "model_used": model,
            "tokens_used": tokens,
            "processing_time": int((time.perf_counter() - started) * 1000),
            "cost_estimate": cost,
        },
    }
