"""
Factor ordination of the M-AMBI metric triple

This module extracts rotated principal axes from a pooled (samples + benchmarks)
metric matrix and projects every pooled row onto them.

It comprises four major functions:
- principal_axes: PCA of the correlation matrix, loadings scaled by component sd
- varimax: orthogonal varimax rotation of a loading matrix
- orient_axes: fixed sign convention for rotated axes
- ordinate: standardize, extract, rotate, orient and project
"""
import logging

import numpy as np
import pandas as pd
from sklearn.decomposition import PCA

from ..data_process.transform import zscore_standardize

logger = logging.getLogger(__name__)

AXIS_NAMES = ["x", "y", "z"]


# Define a class to hold the ordination results
class OrdinationResult:
    def __init__(self, standardized: pd.DataFrame, scores: pd.DataFrame,
                 loadings: pd.DataFrame, rotated_loadings: pd.DataFrame,
                 eigenvalues: np.ndarray, rotation: np.ndarray):
        self.standardized = standardized
        self.scores = scores
        self.loadings = loadings
        self.rotated_loadings = rotated_loadings
        self.eigenvalues = eigenvalues
        self.rotation = rotation

    @property
    def explained_var_ratio(self) -> np.ndarray:
        total = np.sum(self.eigenvalues)
        return self.eigenvalues / total if total > 0 else np.zeros_like(self.eigenvalues)

    def __repr__(self):
        return (
            f"OrdinationResult(rows={self.scores.shape[0]}, "
            f"metrics={list(self.loadings.index)}, "
            f"var_explained_PC1={self.explained_var_ratio[0]:.3f})"
        )


def principal_axes(Z: pd.DataFrame):
    """
    Principal axes of a standardized matrix.

    Parameters:
    - Z: pd.DataFrame, z-scored metrics (rows = samples). Its covariance is the
    correlation matrix of the raw metrics.

    Returns:
    - loadings: pd.DataFrame (metrics x components), eigenvectors scaled by sqrt(eigenvalue)
    - eigenvalues: np.ndarray, one per metric (zero-padded when rows < metrics)
    """
    n_metrics = Z.shape[1]
    pca = PCA(svd_solver="full")
    pca.fit(Z.to_numpy(dtype=float))

    k = len(pca.components_)
    eigenvalues = np.zeros(n_metrics)
    eigenvalues[:k] = np.clip(pca.explained_variance_, 0.0, None)

    vectors = np.zeros((n_metrics, n_metrics))
    vectors[:, :k] = pca.components_.T

    loadings = pd.DataFrame(vectors * np.sqrt(eigenvalues),
                            index=Z.columns,
                            columns=[f'PC{i+1}' for i in range(n_metrics)])
    return loadings, eigenvalues


def varimax(loadings: np.ndarray, normalize: bool = True,
            eps: float = 1e-5, max_iter: int = 1000):
    """
    Varimax rotation of a loading matrix (variables x factors).

    Rows are Kaiser-normalized before rotation and rescaled after when
    normalize=True. Iteration stops once the criterion improves by less
    than a relative eps.

    Returns (rotated_loadings, rotation_matrix).
    """
    L = np.asarray(loadings, dtype=float)
    p, nc = L.shape
    if nc < 2:
        return L.copy(), np.eye(nc)

    if normalize:
        sc = np.sqrt(np.sum(L ** 2, axis=1))
        sc[sc == 0] = 1.0
        L = L / sc[:, None]

    T = np.eye(nc)
    d = 0.0
    for i in range(max_iter):
        z = L @ T
        B = L.T @ (z ** 3 - z @ np.diag(np.sum(z ** 2, axis=0)) / p)
        u, s, vt = np.linalg.svd(B)
        T = u @ vt
        d_past = d
        d = np.sum(s)
        if d < d_past * (1 + eps):
            break
    logger.debug("varimax converged after %d iterations", i + 1)

    rotated = L @ T
    if normalize:
        rotated = rotated * sc[:, None]
    return rotated, T


def orient_axes(rotated: np.ndarray, rotation: np.ndarray, direction: np.ndarray):
    """
    Flip axis signs so each axis points along the quality direction.

    An axis is kept when its loadings have a positive dot product with
    direction; ties fall back to its largest-magnitude loading being positive.
    """
    rotated = rotated.copy()
    rotation = rotation.copy()
    for j in range(rotated.shape[1]):
        col = rotated[:, j]
        s = float(np.dot(col, direction))
        if abs(s) < 1e-12:
            s = float(col[np.argmax(np.abs(col))])
        if s < 0:
            rotated[:, j] = -col
            rotation[:, j] = -rotation[:, j]
    return rotated, rotation


def ordinate(metrics: pd.DataFrame, direction) -> OrdinationResult:
    """
    Ordinate a pooled metric matrix.

    Parameters:
    - metrics: pd.DataFrame, pooled rows x metric triple (raw values).
    - direction: sequence of +1/-1, the sign of each metric in good condition.

    Returns:
    - OrdinationResult with scores columns x, y, z.
    """
    if metrics.shape[0] < 2:
        raise ValueError(f"Insufficient pooled rows for ordination (found {metrics.shape[0]}, need >=2)")
    if metrics.isna().any().any():
        cols = metrics.columns[metrics.isna().any()].tolist()
        raise ValueError(f"Missing metric values in pooled matrix: {cols}")

    Z = zscore_standardize(metrics)
    loadings, eigenvalues = principal_axes(Z)
    rotated, rotation = varimax(loadings.to_numpy())
    rotated, rotation = orient_axes(rotated, rotation, np.asarray(direction, dtype=float))

    names = AXIS_NAMES[:rotated.shape[1]]
    rotated_df = pd.DataFrame(rotated, index=metrics.columns, columns=names)
    scores = pd.DataFrame(Z.to_numpy() @ rotated, index=metrics.index, columns=names)

    return OrdinationResult(standardized=Z, scores=scores, loadings=loadings,
                            rotated_loadings=rotated_df, eigenvalues=eigenvalues,
                            rotation=rotation)
