import numpy as np
from numba import njit
from scipy import sparse
from scipy.linalg import solve_banded


@njit
def tridiagonal_solve(
    lower: np.ndarray, diag: np.ndarray, upper: np.ndarray, rhs: np.ndarray
) -> np.ndarray:  # pragma: no cover
    """
    Solve a tridiagonal linear system with the Thomas algorithm.

    Parameters
    ----------
    lower : np.ndarray
        Sub-diagonal, length n-1; lower[i] multiplies x[i] in row i+1.
    diag : np.ndarray
        Main diagonal, length n.
    upper : np.ndarray
        Super-diagonal, length n-1; upper[i] multiplies x[i+1] in row i.
    rhs : np.ndarray
        Right hand side, length n.

    Returns
    -------
    np.ndarray
        The solution x, length n.
    """
    n = diag.size
    c_prime = np.empty(n)
    d_prime = np.empty(n)

    c_prime[0] = upper[0] / diag[0] if n > 1 else 0.0
    d_prime[0] = rhs[0] / diag[0]
    for i in range(1, n):
        denom = diag[i] - lower[i - 1] * c_prime[i - 1]
        if i < n - 1:
            c_prime[i] = upper[i] / denom
        d_prime[i] = (rhs[i] - lower[i - 1] * d_prime[i - 1]) / denom

    x = np.empty(n)
    x[n - 1] = d_prime[n - 1]
    for i in range(n - 2, -1, -1):
        x[i] = d_prime[i] - c_prime[i] * x[i + 1]
    return x


class TridiagonalMatrix:
    """
    A square tridiagonal matrix stored as its three bands.

    Parameters
    ----------
    lower : np.ndarray
        Sub-diagonal, length n-1: entry (i+1, i).
    diag : np.ndarray
        Main diagonal, length n: entry (i, i).
    upper : np.ndarray
        Super-diagonal, length n-1: entry (i, i+1).
    """

    def __init__(self, lower, diag, upper):
        self.lower = np.asarray(lower, dtype=float)
        self.diag = np.asarray(diag, dtype=float)
        self.upper = np.asarray(upper, dtype=float)
        n = self.diag.size
        if self.lower.shape != (max(n - 1, 0),) or self.upper.shape != (
            max(n - 1, 0),
        ):
            raise ValueError(
                "Off-diagonal bands must have length "
                + str(n - 1)
                + " for a diagonal of length "
                + str(n)
            )

    @property
    def size(self):
        return self.diag.size

    def dot(self, x):
        """
        Matrix-vector product without forming the dense matrix.
        """
        x = np.asarray(x, dtype=float)
        out = self.diag * x
        out[:-1] += self.upper * x[1:]
        out[1:] += self.lower * x[:-1]
        return out

    def row_sums(self):
        out = self.diag.copy()
        out[:-1] += self.upper
        out[1:] += self.lower
        return out

    def shifted(self, scale, shift):
        """
        Return the matrix shift * I + scale * self.
        """
        return TridiagonalMatrix(
            scale * self.lower, shift + scale * self.diag, scale * self.upper
        )

    def to_banded(self):
        """
        The (3, n) layout expected by scipy.linalg.solve_banded with (1, 1).
        """
        ab = np.zeros((3, self.size))
        ab[0, 1:] = self.upper
        ab[1, :] = self.diag
        ab[2, :-1] = self.lower
        return ab

    def to_sparse(self):
        return sparse.diags(
            [self.lower, self.diag, self.upper], offsets=[-1, 0, 1], format="csr"
        )

    def solve(self, rhs, method="thomas"):
        """
        Solve self @ x = rhs for x.

        Parameters
        ----------
        rhs : np.ndarray
            Right hand side.
        method : str
            "thomas" for the compiled Thomas algorithm, "banded" for LAPACK's
            banded solver through scipy.

        Returns
        -------
        x : np.ndarray
        """
        rhs = np.asarray(rhs, dtype=float)
        if rhs.shape != (self.size,):
            raise ValueError(
                "Right hand side has shape "
                + str(rhs.shape)
                + ", expected ("
                + str(self.size)
                + ",)"
            )
        if method == "thomas":
            return tridiagonal_solve(self.lower, self.diag, self.upper, rhs)
        if method == "banded":
            return solve_banded((1, 1), self.to_banded(), rhs)
        raise ValueError("Unknown solve method: " + str(method))
