"""Levenberg-Marquardt solver for general non-linear least-squares problems."""

from __future__ import annotations

import sys
from typing import Callable, Optional

import numpy as np

Vector = np.ndarray
ResidualFn = Callable[[Vector], Vector]
JacobianFn = Callable[[Vector], np.ndarray]


class LevMarq:
    """Minimises ``||f(z)||^2`` with the Levenberg-Marquardt method.

    ``f`` maps a parameter vector to a residual vector; an optional
    ``jacobian`` maps a parameter vector to the Jacobian of ``f``. Without
    one, the Jacobian is estimated by central differences.
    """

    def __init__(
        self,
        max_iters: int = 1000,
        min_error: float = 0.0,
        min_step_error_diff: float = 0.0,
        tau: float = 1.0,
        der_epsilon: float = 1e-3,
    ) -> None:
        self.set_params(max_iters, min_error, min_step_error_diff, tau, der_epsilon)
        self.verbose = False
        self.step_callback: Optional[Callable[[Vector], None]] = None
        self.stop_function: Optional[Callable[[Vector], bool]] = None
        self._v = 5.0
        self._mu = -1.0
        self._curr_z: Vector = np.zeros(0)
        self._x: Vector = np.zeros(0)
        self._curr_err = np.float64(0.0)
        self._prev_err = np.float64(0.0)
        self._min_err = np.float64(0.0)

    def set_params(
        self,
        max_iters: int,
        min_error: float,
        min_step_error_diff: float = 0.0,
        tau: float = 1.0,
        der_epsilon: float = 1e-3,
    ) -> None:
        """Set the stopping criteria, the initial damping scale and the derivative step."""
        self.max_iters = int(max_iters)
        self.min_error = float(min_error)
        self.min_step_error_diff = float(min_step_error_diff)
        self.tau = float(tau)
        self.der_epsilon = float(der_epsilon)

    def calc_derivatives(self, z: Vector, f: ResidualFn) -> np.ndarray:
        """Estimate the Jacobian of ``f`` at ``z`` by central differences."""
        z = np.asarray(z, dtype=float)
        columns = []
        for i in range(z.shape[0]):
            zp = z.copy()
            zm = z.copy()
            zp[i] += self.der_epsilon
            zm[i] -= self.der_epsilon
            xp = np.asarray(f(zp), dtype=float)
            xm = np.asarray(f(zm), dtype=float)
            columns.append((xp - xm) / (2.0 * self.der_epsilon))
        return np.column_stack(columns)

    def _jacobian_for(self, f: ResidualFn, jacobian: Optional[JacobianFn]) -> JacobianFn:
        if jacobian is not None:
            return jacobian
        return lambda z: self.calc_derivatives(z, f)

    def init(self, z: Vector, f: ResidualFn) -> None:
        """Prepare step-by-step solving from the starting point ``z``."""
        self._curr_z = np.array(z, dtype=float)
        self._x = np.asarray(f(self._curr_z), dtype=float)
        err = np.sum(self._x * self._x)
        self._min_err = self._curr_err = self._prev_err = err
        self._mu = -1.0

    def step(self, f: ResidualFn, jacobian: Optional[JacobianFn] = None) -> bool:
        """Take one step of the search; return whether it was accepted."""
        jac = self._jacobian_for(f, jacobian)
        j = np.asarray(jac(self._curr_z), dtype=float)
        jtj = j.T @ j
        b = -j.T @ self._x
        if self._mu < 0:
            self._mu = float(np.max(np.diag(jtj))) * self.tau

        gain = np.float64(0.0)
        prev_mu = 0.0
        ntries = 0
        accepted = False
        while True:
            jtj[np.diag_indices_from(jtj)] += self._mu - prev_mu
            prev_mu = self._mu
            try:
                delta = np.linalg.solve(jtj, b)
            except np.linalg.LinAlgError:
                delta = np.linalg.lstsq(jtj, b, rcond=None)[0]
            estimated = self._curr_z + delta
            self._x = np.asarray(f(estimated), dtype=float)
            err = np.sum(self._x * self._x)
            lin = 0.5 * np.dot(delta, self._mu * delta - b)
            with np.errstate(divide="ignore", invalid="ignore"):
                gain = np.divide(err - self._prev_err, lin)
            if gain > 0:
                self._mu *= max(0.33, 1.0 - (2.0 * gain - 1.0) ** 3)
                self._v = 5.0
                self._curr_err = err
                self._curr_z = estimated
                accepted = True
            else:
                self._mu *= self._v
                self._v *= 5.0
            if gain <= 0 and ntries < 5:
                ntries += 1
                continue
            break

        if self.verbose:
            print(
                f"Curr Error={self._curr_err:.5g} "
                f"AErr(prev-curr)={self._prev_err - self._curr_err:.5g} "
                f"gain={gain:.5g} dumping factor={self._mu:.5g}"
            )
        if self._curr_err < self._prev_err:
            self._curr_err, self._prev_err = self._prev_err, self._curr_err
        return accepted

    def current_solution(self) -> tuple[Vector, float]:
        """Return the current parameter vector and its error."""
        return self._curr_z.copy(), float(self._curr_err)

    def solve(
        self, z: Vector, f: ResidualFn, jacobian: Optional[JacobianFn] = None
    ) -> tuple[Vector, float]:
        """Minimise from ``z``; return the solution and its error."""
        jac = self._jacobian_for(f, jacobian)
        self.init(z, f)

        if self.stop_function is not None:
            while True:
                self.step(f, jac)
                if self.step_callback is not None:
                    self.step_callback(self._curr_z)
                if self.stop_function(self._curr_z):
                    break
        else:
            must_exit = 0
            i = 0
            while i < self.max_iters and not must_exit:
                if self.verbose:
                    print(f"iteration {i}/{self.max_iters}  ", end="", file=sys.stderr)
                accepted = self.step(f, jac)
                if self._curr_err < self.min_error:
                    must_exit = 1
                if abs(self._prev_err - self._curr_err) <= self.min_step_error_diff or not accepted:
                    must_exit = 2
                if self._curr_err < self._prev_err:
                    must_exit = 3
                if self.step_callback is not None:
                    self.step_callback(self._curr_z)
                i += 1

        return self.current_solution()