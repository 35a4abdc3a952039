# neuralarch/nas_engine/search_simulator.py

"""
Simulated optimization sessions.

No session state is kept between calls: a searchId is minted on start, and
status/update/stop fabricate plausible progress for whatever id they are given.
"""

import random
import string
import time
from typing import Any, Dict, List, Optional

ALGORITHMS = ("evolutionary", "bayesian", "gradient", "reinforcement", "random")
UPDATE_ACTIONS = ("pause", "resume", "adjust_budget", "expand_search_space")
# upper bound on budget.parallel, and so on the candidates built per request
MAX_PARALLEL = 64

DEFAULT_LAYER_TYPES = ["conv2d", "depthwise_conv", "dense", "batch_norm", "dropout", "pooling"]
DEFAULT_OPTIMIZERS = ["adam", "sgd", "rmsprop"]
DEFAULT_LEARNING_RATES = [0.001, 0.01, 0.1]
DEFAULT_BATCH_SIZES = [16, 32, 64, 128]

_BASE36 = string.digits + string.ascii_lowercase


def _random_suffix(length: int) -> str:
    return "".join(random.choice(_BASE36) for _ in range(length))


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def new_search_id(algorithm: str) -> str:
    """nas_<algorithm>_<epoch ms>_<9 base-36 chars>"""
    return f"nas_{algorithm}_{_epoch_ms()}_{_random_suffix(9)}"


def algorithm_from_search_id(search_id: str) -> str:
    parts = (search_id or "").split("_")
    if len(parts) >= 2 and parts[0] == "nas" and parts[1] in ALGORITHMS:
        return parts[1]
    return "evolutionary"


def generate_random_layers(search_space: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """5 to 19 layers drawn from the search space's layer types"""
    available = (search_space or {}).get("layers") or DEFAULT_LAYER_TYPES
    layers = []

    for _ in range(random.randint(5, 19)):
        layer_type = random.choice(available)
        layer = {"type": layer_type}

        if layer_type == "conv2d":
            layer["filters"] = random.choice([16, 32, 64, 128, 256])
            layer["kernel_size"] = random.choice([1, 3, 5, 7])
            layer["activation"] = random.choice(["relu", "swish", "gelu"])
        elif layer_type == "depthwise_conv":
            layer["kernel_size"] = random.choice([3, 5, 7])
            layer["activation"] = random.choice(["relu", "swish"])
        elif layer_type == "dense":
            layer["units"] = random.choice([64, 128, 256, 512, 1024])
            layer["activation"] = random.choice(["relu", "swish", "gelu"])
        elif layer_type == "dropout":
            layer["rate"] = random.uniform(0.1, 0.6)
        elif layer_type == "batch_norm":
            layer["momentum"] = random.uniform(0.9, 1.0)

        layers.append(layer)

    return layers


def generate_population(size: int, search_space: Optional[Dict[str, Any]] = None,
                        seeds: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
    """Seeds fill up to half the population, random candidates the rest; best score first"""
    search_space = search_space or {}
    population = list((seeds or [])[:size // 2])

    while len(population) < size:
        population.append({
            "id": f"arch_{_epoch_ms()}_{_random_suffix(6)}",
            "layers": generate_random_layers(search_space),
            "optimizer": random.choice(search_space.get("optimizers") or DEFAULT_OPTIMIZERS),
            "learningRate": random.choice(search_space.get("learningRates") or DEFAULT_LEARNING_RATES),
            "batchSize": random.choice(search_space.get("batchSizes") or DEFAULT_BATCH_SIZES),
            "score": random.uniform(0.6, 0.9),
            "estimatedParams": random.randint(1_000_000, 20_999_999),
            "estimatedLatency": random.uniform(10, 60),
            "confidence": 0.5,
        })

    return sorted(population, key=lambda candidate: candidate.get("score") or 0, reverse=True)


def _initial_progress(remaining: float, best_score: float = 0) -> Dict[str, Any]:
    return {
        "evaluations": 0,
        "bestScore": best_score,
        "convergence": 0,
        "timeElapsed": 0,
        "estimatedRemaining": remaining,
    }


def start_search(algorithm: Optional[str], search_space: Optional[Dict[str, Any]],
                 objectives: Optional[Dict[str, Any]], budget: Optional[Dict[str, Any]],
                 constraints: Optional[Dict[str, Any]] = None,
                 current_best: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    if not algorithm or search_space is None or objectives is None or budget is None:
        raise ValueError("Missing required parameters: algorithm, searchSpace, objectives, budget")
    if algorithm not in ALGORITHMS:
        raise ValueError(f"Unsupported algorithm. Supported: {', '.join(ALGORITHMS)}")

    parallel = min(max(int(budget.get("parallel") or 1), 0), MAX_PARALLEL)
    max_evaluations = int(budget.get("maxEvaluations") or 0)
    max_time = budget.get("maxTime") or 0
    search_id = new_search_id(algorithm)

    if algorithm == "evolutionary":
        population_size = min(parallel * 4, 50)
        generations = max_evaluations // population_size if population_size else 0
        candidates = generate_population(population_size, search_space, current_best)[:5]
        best_seed = (current_best or [{}])[0].get("score") or 0
        progress = _initial_progress(max_time, best_seed)
        insights = [
            f"Initialized evolutionary search with population size {population_size}",
            f"Planning {generations} generations with {max_evaluations} total evaluations",
            "Using tournament selection and uniform crossover",
            "Applying adaptive mutation rates based on convergence",
        ]
    elif algorithm == "bayesian":
        initial_samples = min(parallel * 2, 20)
        candidates = generate_population(initial_samples, search_space)
        progress = _initial_progress(max_time)
        insights = [
            f"Initialized Bayesian optimization with {initial_samples} initial samples",
            "Using Gaussian Process surrogate model",
            "Applying Expected Improvement acquisition function",
            "Balancing exploration vs exploitation automatically",
        ]
    elif algorithm == "gradient":
        candidates = generate_population(parallel, search_space)
        progress = _initial_progress(max_time * 0.3)
        insights = [
            "Initialized DARTS-style differentiable architecture search",
            "Using continuous relaxation of discrete architecture choices",
            "Applying progressive shrinking for architecture selection",
            "Memory efficient implementation with gradient checkpointing",
        ]
    elif algorithm == "reinforcement":
        candidates = []
        progress = _initial_progress(max_time)
        insights = [
            "Initialized reinforcement learning controller",
            "Training agent to generate high-performance architectures",
            "Using accuracy as reward signal with efficiency penalties",
            "Implementing progressive training curriculum",
        ]
    else:
        generated = generate_population(parallel * 2, search_space)
        candidates = generated[:5]
        progress = _initial_progress(max_time * 0.5)
        insights = [
            f"Generated {len(generated)} random architectures for evaluation",
            "Random search provides strong baseline for comparison",
            "Efficient parallelization across available resources",
            "No convergence assumptions - explores full search space",
        ]

    return {
        "success": True,
        "algorithm": algorithm,
        "searchId": search_id,
        "status": "initialized",
        "progress": progress,
        # never more candidates than can be evaluated in parallel
        "candidates": candidates[:parallel],
        "insights": insights,
    }


def search_status(search_id: Optional[str]) -> Dict[str, Any]:
    if not search_id:
        raise ValueError("Search ID is required")

    elapsed = random.uniform(0, 2)
    evaluations = random.randint(100, 599)
    best_score = random.uniform(0.8, 0.95)

    return {
        "success": True,
        "algorithm": algorithm_from_search_id(search_id),
        "searchId": search_id,
        "status": "running",
        "progress": {
            "evaluations": evaluations,
            "bestScore": best_score,
            "convergence": min(evaluations / 1000, 0.95),
            "timeElapsed": elapsed,
            "estimatedRemaining": max(0, 4 - elapsed),
        },
        "candidates": generate_population(5),
        "insights": [
            f"Found {evaluations} architectures so far",
            f"Best architecture achieves {best_score * 100:.1f}% efficiency score",
            "Search is converging towards optimal solutions",
            "Consider expanding search space if plateau is reached",
        ],
    }


def update_search(search_id: Optional[str], action: Optional[str],
                  parameters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    if not search_id or not action:
        raise ValueError("Search ID and action are required")
    if action not in UPDATE_ACTIONS:
        raise ValueError(f"Invalid action: {action}. Supported actions: {', '.join(UPDATE_ACTIONS)}")

    return {
        "success": True,
        "algorithm": algorithm_from_search_id(search_id),
        "searchId": search_id,
        "status": "running",
        "insights": [
            f"Successfully applied action: {action}",
            "Search parameters updated",
            "Continuing optimization with new settings",
        ],
    }


def stop_search(search_id: Optional[str]) -> Dict[str, Any]:
    if not search_id:
        raise ValueError("Search ID is required")

    return {
        "success": True,
        "algorithm": algorithm_from_search_id(search_id),
        "searchId": search_id,
        "status": "completed",
        "progress": {
            "evaluations": 1000,
            "bestScore": 0.89,
            "convergence": 0.95,
            "timeElapsed": 3.5,
            "estimatedRemaining": 0,
        },
        "insights": [
            "Optimization stopped successfully",
            "Final results saved to database",
            "Best architectures ready for deployment",
            "Performance analysis available in dashboard",
        ],
    }
