# tests/test_persistence.py
import pytest

from persistence import PersistentModel, confirm
from pipeline_utils import build_softmax_pipeline


def _trained_model(dataset, path):
    pipeline = build_softmax_pipeline(
        projection_dims=3, verbose=False, epochs=10, min_change=0.0
    )
    model = PersistentModel(pipeline, str(path))
    model.train(dataset)
    return model


def test_train_returns_loss_history(small_dataset, tmp_path):
    model = _trained_model(small_dataset, tmp_path / "har.model")

    assert model.steps() == model.estimator.steps()
    assert len(model.steps()) == 10
    # nothing is written until save() is called
    assert not (tmp_path / "har.model").exists()


def test_saved_model_predicts_training_label_domain(small_dataset, tmp_path):
    path = tmp_path / "models" / "har.model"
    model = _trained_model(small_dataset, path)
    before = model.predict(small_dataset)

    model.save()
    restored = PersistentModel.load(str(path))
    after = restored.predict(small_dataset)

    assert path.exists()
    assert len(after) == len(small_dataset)
    assert set(after) <= set(small_dataset.possible_outcomes())
    assert after.tolist() == before.tolist()


def test_load_missing_model(tmp_path):
    with pytest.raises(FileNotFoundError):
        PersistentModel.load(str(tmp_path / "missing.model"))


@pytest.mark.parametrize(
    "answer, expected",
    [("y", True), ("Y", True), (" y \n", True), ("", False), ("n", False), ("yes", False)],
)
def test_confirm(monkeypatch, answer, expected):
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return answer

    monkeypatch.setattr("builtins.input", fake_input)

    assert confirm("Save this model? (y|[n]): ") is expected
    assert prompts == ["Save this model? (y|[n]): "]
