"""
DVS CPU model.

The processor offers a list of discrete speed levels, relative to its maximum
speed (1.0). Levels are kept in the order given by the workload file.
"""


class Cpu:

    def __init__(self, lvls=None):
        self._lvls = list(lvls) if lvls else []

    def select_speed(self, u: float) -> float:
        """
        Speed to run at for the utilization u. The levels are scanned in table
        order and the first one greater than u is returned, so the lowest
        sufficient level is chosen only if the table is sorted ascending.
        :param u: required processor fraction
        :return: selected level, or u if there are no levels or none is greater
        """
        for lvl in self._lvls:
            if lvl > u:
                return lvl
        return u

    @property
    def dvs(self):
        return bool(self._lvls)

    @property
    def numlvls(self):
        return len(self._lvls)

    @property
    def lvls(self):
        return self._lvls
