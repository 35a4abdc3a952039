import pytest

from neuralarch.nas_engine.topic_classifier import classify_topic, is_greeting, GENERAL
from neuralarch.nas_engine.chat_responder import generate_chat_reply, GREETING
from neuralarch.nas_engine.enhanced_responder import generate_enhanced_reply
from neuralarch.nas_engine import architecture_evaluator as evaluator


@pytest.mark.parametrize("prompt,topic", [
    ("How do I optimize my model?", "optimization"),
    ("ResNet versus ViT", "comparison"),
    ("my validation loss is flat", "performance"),
    ("deploy on a phone GPU", "hardware"),
    ("try an evolutionary strategy", "search"),
    ("add a resnet block", "design"),
    ("I'm stuck", "troubleshooting"),
    ("cifar augmentation", "dataset"),
    ("good morning", GENERAL),
])
def test_classify_topic(prompt, topic):
    assert classify_topic(prompt) == topic


def test_first_matching_topic_wins():
    # "faster" (optimization) and "gpu" (hardware) both match
    assert classify_topic("faster on GPU") == "optimization"


def test_greeting_needs_whole_word():
    assert is_greeting("Hey there")
    assert not is_greeting("this is it")
    assert generate_chat_reply("hi") == GREETING


def test_enhanced_reply_general_topic_has_no_insights():
    reply = generate_enhanced_reply("good morning")
    assert reply["topic"] == GENERAL
    assert reply["insights"] == []
    assert reply["visualizations"] == []


@pytest.mark.parametrize("dataset,baseline", [
    ("cifar10", 0.85),
    ("cifar100", 0.6),
    ("imagenet", 0.7),
    ("custom", 0.7),
])
def test_empty_architecture_scores_at_baseline(dataset, baseline):
    result = evaluator.evaluate_architecture({"layers": []}, dataset)
    assert result["metrics"]["parameterCount"] == 0
    assert result["metrics"]["estimatedAccuracy"] == baseline
    assert result["metrics"]["efficiencyScore"] is None
    assert result["score"] is None


def test_conv_and_dense_costs():
    layers = [
        {"type": "conv2d", "filters": 32, "kernel_size": 3},
        {"type": "dense", "units": 10, "input_size": 100},
        {"type": "batch_norm", "features": 16},
        {"type": "dropout"},
    ]
    costs = evaluator.estimate_layer_costs(layers)
    conv_params = 32 * 3 * 3 * 3
    assert costs["parameters"] == conv_params + 10 * 100 + 32
    assert costs["flops"] == conv_params * 224 * 224 + (conv_params + 1000)
    assert costs["latency"] == pytest.approx(0.032 + 0.001 + 0.05 + 0.01)


def test_conv_input_channels_follow_previous_layer():
    layers = [
        {"type": "conv2d", "filters": 16, "kernel_size": 1},
        {"type": "conv2d", "filters": 8, "kernel_size": 1, "input_shape": [16, 32, 32]},
    ]
    costs = evaluator.estimate_layer_costs(layers)
    assert costs["parameters"] == 16 * 3 + 8 * 16
    assert costs["flops"] == 48 * 224 * 224 + (48 + 128) * 32 * 32


def test_accuracy_is_clamped():
    assert evaluator.estimate_accuracy(50_000_000, "cifar10") == 0.98


def test_evaluate_requires_architecture():
    with pytest.raises(ValueError):
        evaluator.evaluate_architecture(None)


def test_optimize_shrinks_under_parameter_constraint():
    architecture = {
        "parameters": 10_000_000,
        "layers": [{"type": "conv2d", "filters": 128}, {"type": "dense", "units": 512}],
    }
    result = evaluator.optimize_architecture(architecture, {"maxParams": 1_000_000, "targetLatency": 20})
    conv, dense = result["result"]["layers"]
    assert conv["filters"] == 89
    assert conv["separable"] is True
    assert dense["units"] == 409
    assert result["metrics"]["estimatedLatency"] == 16
    assert len(result["optimizations"]) == 2
    # the input is left untouched
    assert architecture["layers"][0]["filters"] == 128


def test_suggest_filters_templates():
    result = evaluator.suggest_architectures(constraints={"maxParams": 6_000_000, "targetLatency": 20})
    assert [arch["name"] for arch in result["result"]] == ["MobileNetV3-Small Inspired"]


def test_compare_ranks_by_efficiency():
    result = evaluator.compare_architectures([
        {"name": "A", "accuracy": 0.9, "parameters": 5, "latency": 10, "efficiency": 70},
        {"name": "B", "accuracy": 0.8, "parameters": 2, "latency": 30, "efficiency": 80},
    ])
    assert result["result"]["winner"]["name"] == "B"
    assert result["result"]["insights"]["bestAccuracy"] == 0.9
    assert result["result"]["insights"]["smallestModel"]["name"] == "B"
    assert result["result"]["insights"]["fastestInference"]["name"] == "A"


def test_compare_needs_two():
    with pytest.raises(ValueError):
        evaluator.compare_architectures([{"name": "solo"}])


def test_run_operation_rejects_unknown():
    with pytest.raises(ValueError, match="Invalid operation"):
        evaluator.run_operation("train")
    with pytest.raises(ValueError, match="Operation is required"):
        evaluator.run_operation(None)
