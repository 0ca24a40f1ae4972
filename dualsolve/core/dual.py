"""Immutable dual numbers and matrices of dual numbers."""

from numbers import Real
from typing import Any, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from dualsolve.core.exceptions import DerivativeSizeError

Index = Union[int, tuple[int, ...]]

_EMPTY = np.zeros(0)
_EMPTY.flags.writeable = False


def _frozen(derivatives: ArrayLike) -> NDArray:
    d = np.array(derivatives, dtype=float).reshape(-1)
    d.flags.writeable = False
    return d


def _combine(a: NDArray, b: NDArray) -> NDArray:
    """Sum two derivative vectors; an empty vector acts as zero."""
    if a.size == 0:
        return b
    if b.size == 0:
        return a
    if a.size != b.size:
        raise DerivativeSizeError(
            f"Cannot combine derivative vectors of size {a.size} and {b.size}",
            size=b.size,
            expected_size=a.size,
        )
    return a + b


class Dual:
    """
    First-order dual number: a value plus its derivatives with respect to an
    ordered set of tracked variables.

    Variables are identified by position only. An empty derivative vector
    means "no sensitivity" and behaves as the zero vector of whatever length
    it is combined with.

    Args:
        value: Real part
        derivatives: Derivative coefficients, one per tracked variable
    """

    __slots__ = ("_value", "_derivatives")

    def __init__(self, value: float, derivatives: ArrayLike = ()) -> None:
        self._value = float(value)
        d = _frozen(derivatives)
        self._derivatives = d if d.size else _EMPTY

    @property
    def value(self) -> float:
        return self._value

    @property
    def derivatives(self) -> NDArray:
        """Read-only derivative vector (possibly empty)."""
        return self._derivatives

    @property
    def num_derivatives(self) -> int:
        return self._derivatives.size

    def __float__(self) -> float:
        return self._value

    def __repr__(self) -> str:
        dual = ", ".join(f"{d:g}" for d in self._derivatives)
        return f"Dual({self._value:g}, [{dual}])"

    def __neg__(self) -> "Dual":
        return Dual(-self._value, -self._derivatives)

    def __pos__(self) -> "Dual":
        return self

    def __add__(self, other: Any) -> Any:
        if isinstance(other, Dual):
            return Dual(
                self._value + other._value,
                _combine(self._derivatives, other._derivatives),
            )
        if isinstance(other, np.ndarray):
            return other + self
        if isinstance(other, Real):
            return Dual(self._value + float(other), self._derivatives)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, (Dual, Real)):
            return self + (-other)
        if isinstance(other, np.ndarray):
            return (-other) + self
        return NotImplemented

    def __rsub__(self, other: Any) -> Any:
        return (-self) + other

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, Dual):
            # Product rule: d(uv) = u dv + v du
            return Dual(
                self._value * other._value,
                _combine(
                    self._derivatives * other._value,
                    other._derivatives * self._value,
                ),
            )
        if isinstance(other, np.ndarray):
            return other * self
        if isinstance(other, Real):
            c = float(other)
            return Dual(self._value * c, self._derivatives * c)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Any:
        if isinstance(other, Dual):
            # Quotient rule: d(u/v) = (du v - u dv) / v^2
            v = other._value
            return Dual(
                self._value / v,
                _combine(
                    self._derivatives / v,
                    other._derivatives * (-self._value / v**2),
                ),
            )
        if isinstance(other, Real):
            c = float(other)
            return Dual(self._value / c, self._derivatives / c)
        return NotImplemented

    def __rtruediv__(self, other: Any) -> Any:
        if isinstance(other, Real):
            return Dual(float(other)) / self
        return NotImplemented


def _as_dual(entry: Any) -> Dual:
    if isinstance(entry, Dual):
        return entry
    if isinstance(entry, Real):
        return Dual(entry)
    raise TypeError(
        f"DualMatrix entries must be Dual or real numbers, got {type(entry).__name__}"
    )


class DualMatrix:
    """
    Immutable vector or matrix whose entries are Dual numbers.

    The container type is what marks a matrix as dual-valued: an object
    ndarray of Dual entries is not classified, a DualMatrix is.

    Args:
        entries: Nested sequence or ndarray of Dual or real numbers
            (1-D or 2-D); real numbers get empty derivatives
    """

    # Make ndarray @ DualMatrix defer to __rmatmul__
    __array_ufunc__ = None

    def __init__(self, entries: Union[ArrayLike, Sequence[Any]]) -> None:
        raw = np.asarray(entries, dtype=object)
        if raw.ndim not in (1, 2):
            raise ValueError(f"DualMatrix must be 1-D or 2-D, got {raw.ndim}-D")
        data = np.empty(raw.shape, dtype=object)
        for index in np.ndindex(raw.shape):
            data[index] = _as_dual(raw[index])
        data.flags.writeable = False
        self._entries = data

    @classmethod
    def from_values(cls, values: ArrayLike) -> "DualMatrix":
        """Cast a numeric array; every entry gets an empty derivative vector."""
        values = np.asarray(values, dtype=float)
        return cls(np.vectorize(Dual, otypes=[object])(values))

    @classmethod
    def from_gradient(cls, values: ArrayLike, gradient: ArrayLike) -> "DualMatrix":
        """
        Build from values and a gradient matrix.

        Args:
            values: Numeric vector or matrix
            gradient: (values.size, k) array; row i holds the derivatives of
                entry i in row-major order

        Returns:
            DualMatrix with k derivatives per entry
        """
        values = np.asarray(values, dtype=float)
        gradient = np.asarray(gradient, dtype=float)
        if gradient.ndim != 2 or gradient.shape[0] != values.size:
            raise ValueError(
                f"Gradient of shape {gradient.shape} does not match "
                f"{values.size} entries"
            )
        data = np.empty(values.shape, dtype=object)
        for row, index in enumerate(np.ndindex(values.shape)):
            data[index] = Dual(values[index], gradient[row])
        return cls(data)

    @property
    def shape(self) -> tuple[int, ...]:
        return self._entries.shape

    @property
    def ndim(self) -> int:
        return self._entries.ndim

    @property
    def size(self) -> int:
        return self._entries.size

    @property
    def entries(self) -> NDArray:
        """Read-only object array of Dual entries."""
        return self._entries

    @property
    def values(self) -> NDArray:
        """Float array of entry values."""
        values = np.empty(self.shape)
        for index in np.ndindex(self.shape):
            values[index] = self._entries[index].value
        return values

    def __getitem__(self, index: Index) -> Dual:
        entry = self._entries[index]
        if not isinstance(entry, Dual):
            raise IndexError("DualMatrix indexing must select a single entry")
        return entry

    def __repr__(self) -> str:
        return f"DualMatrix({self._entries.tolist()!r})"

    def replace(self, index: Index, entry: Union[Dual, float]) -> "DualMatrix":
        """Return a copy with one entry replaced."""
        data = self._entries.copy()
        data[index] = _as_dual(entry)
        return DualMatrix(data)

    def derivative_sizes(self) -> NDArray:
        """Integer array (same shape) of each entry's derivative length."""
        sizes = np.empty(self.shape, dtype=int)
        for index in np.ndindex(self.shape):
            sizes[index] = self._entries[index].num_derivatives
        return sizes

    def derivative_tensor(self, num_variables: int) -> NDArray:
        """
        Stack derivatives into a (num_variables, *shape) float array.

        Entries with an empty derivative vector contribute zeros. Non-empty
        vectors must have length num_variables.
        """
        tensor = np.zeros((num_variables,) + self.shape)
        for index in np.ndindex(self.shape):
            d = self._entries[index].derivatives
            if d.size == 0:
                continue
            if d.size != num_variables:
                raise DerivativeSizeError(
                    f"Entry {index} has size {d.size}, expected {num_variables}",
                    index=index,
                    size=d.size,
                    expected_size=num_variables,
                )
            tensor[(slice(None),) + index] = d
        return tensor

    def gradient_matrix(self) -> NDArray:
        """(size, k) gradient matrix, rows in row-major entry order."""
        sizes = self.derivative_sizes()
        nonempty = np.unique(sizes[sizes > 0])
        if nonempty.size > 1:
            raise DerivativeSizeError(
                f"Entries have inconsistent derivative sizes {nonempty.tolist()}"
            )
        k = int(nonempty[0]) if nonempty.size else 0
        tensor = self.derivative_tensor(k)
        return tensor.reshape(k, self.size).T

    def __matmul__(self, other: Any) -> "DualMatrix":
        if isinstance(other, DualMatrix):
            other = other._entries
        elif isinstance(other, np.ndarray):
            other = other.astype(object)
        else:
            return NotImplemented
        return DualMatrix(np.matmul(self._entries, other))

    def __rmatmul__(self, other: Any) -> "DualMatrix":
        if not isinstance(other, np.ndarray):
            return NotImplemented
        return DualMatrix(np.matmul(other.astype(object), self._entries))
