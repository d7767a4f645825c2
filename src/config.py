"""config.py

Central place for file paths and hyperparameters.

This file is deliberately small and declarative: it should *not* contain
any heavy logic. All the knobs of the HAR experiments (projection sizes,
t-SNE settings, optimizer rates, stopping rules) live here so a run can
be reproduced by reading a single file.

"""

import os
from dataclasses import dataclass

# Scripts live in src/; data, models and outputs sit one level up
SRC_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(SRC_DIR)

DATA_DIR = os.path.join(PROJECT_ROOT, "data")
MODEL_DIR = os.path.join(PROJECT_ROOT, "models")


@dataclass(frozen=True)
class DatasetConfig:
    """Bundle the HAR file locations in one place.

    The raw dataset ships as separate feature/label CSVs per split; the
    classifier scripts read the combined NDJSON records produced from
    them by ``convert.py``.
    """

    train_samples_csv: str
    train_labels_csv: str
    test_samples_csv: str
    test_labels_csv: str
    train_ndjson: str
    test_ndjson: str


HAR_DATASET = DatasetConfig(
    train_samples_csv=os.path.join(DATA_DIR, "train", "X_train.csv"),
    train_labels_csv=os.path.join(DATA_DIR, "train", "y_train.csv"),
    test_samples_csv=os.path.join(DATA_DIR, "test", "X_test.csv"),
    test_labels_csv=os.path.join(DATA_DIR, "test", "y_test.csv"),
    train_ndjson=os.path.join(DATA_DIR, "train.ndjson"),
    test_ndjson=os.path.join(DATA_DIR, "test.ndjson"),
)

# Output files written by the scripts
EMBEDDING_CSV_PATH = os.path.join(PROJECT_ROOT, "embedding.csv")
PROGRESS_CSV_PATH = os.path.join(PROJECT_ROOT, "progress.csv")
REPORT_JSON_PATH = os.path.join(PROJECT_ROOT, "report.json")

# Persisted models, one file per classifier
MODEL_PATHS = {
    "softmax": os.path.join(MODEL_DIR, "har.model"),
    "mlp": os.path.join(MODEL_DIR, "har.rbx"),
}

DEFAULT_MODEL = "softmax"
AVAILABLE_MODELS = tuple(MODEL_PATHS.keys())

AVAILABLE_EMBEDDERS = ("tsne", "pca")
DEFAULT_EMBEDDER = "tsne"


def get_model_path(name: str = DEFAULT_MODEL) -> str:
    """Return the persisted model path for a classifier name.

    Parameters
    ----------
    name:
        One of ``AVAILABLE_MODELS`` (case-insensitive).
    """
    normalized = name.lower()
    if normalized not in MODEL_PATHS:
        raise ValueError(
            f"Unknown model '{name}'. Choose from: {', '.join(AVAILABLE_MODELS)}"
        )
    return MODEL_PATHS[normalized]


# ---------------------------
# Data hyperparameters
# ---------------------------

# Seed for projections, PCA, t-SNE and torch weight init. Row shuffling
# in the exploration script stays unseeded unless --seed is given.
RANDOM_SEED = 3

# Number of (shuffled) rows fed to the embedders
EMBEDDING_LIMIT = 1000

# Random projection target dimensionality
SPARSE_PROJECTION_DIMS = 120     # before t-SNE
GAUSSIAN_PROJECTION_DIMS = 110   # before the softmax classifier

# ---------------------------
# Embedder hyperparameters
# ---------------------------

EMBEDDING_DIMENSIONS = 2
TSNE_PERPLEXITY = 30.0
TSNE_EXAGGERATION = 12.0
TSNE_LEARNING_RATE = 100.0
TSNE_MAX_ITER = 1000

# ---------------------------
# Softmax classifier hyperparameters
# ---------------------------

SOFTMAX_BATCH_SIZE = 256
SOFTMAX_LEARNING_RATE = 1e-3
SOFTMAX_MOMENTUM = 0.1
SOFTMAX_ALPHA = 1e-4          # L2 regularization (weight decay)
SOFTMAX_EPOCHS = 1000
SOFTMAX_MIN_CHANGE = 1e-4     # stop when the loss moves less than this
SOFTMAX_WINDOW = 5            # epochs without improvement before stopping

# ---------------------------
# Multilayer perceptron hyperparameters
# ---------------------------

MLP_HIDDEN_LAYERS = (100, 100)
MLP_DROPOUT = 0.2
MLP_BATCH_SIZE = 256
MLP_LEARNING_RATE = 1e-3
MLP_ALPHA = 1e-4
MLP_EPOCHS = 1000
MLP_MIN_CHANGE = 1e-4
MLP_WINDOW = 5
MLP_HOLDOUT = 0.1             # fraction of training rows used for the score

# DataLoader worker processes; datasets are small and held in memory
NUM_WORKERS = 0
