from colorama import init as colorama_init, Fore, Style
from datetime import datetime
colorama_init(autoreset=True)


class Log:
    def __init__(self, verbose: int = 1):
        self.verbose = verbose
        self.PAY = Fore.MAGENTA

    def _time(self):
        return datetime.now().strftime("[%H:%M:%S]")

    def _fmt(self, level: str, color: str):
        return f"{self._time()} {color}[{level}]{Style.RESET_ALL}"

    def info(self, msg: str):
        if self.verbose >= 1:
            print(f"{self._fmt('INFO', Fore.CYAN)} {msg}")

    def warn(self, msg: str):
        if self.verbose >= 0:
            print(f"{self._fmt('WARNING', Fore.YELLOW)} {msg}")

    def ok(self, msg: str):
        print(f"{self._fmt('SUCCESS', Fore.GREEN)} {msg}")

    def fail(self, msg: str):
        print(f"{self._fmt('FAIL', Fore.RED)} {msg}")

    def debug(self, msg: str):
        if self.verbose >= 2:
            print(f"{self._fmt('DEBUG', Fore.MAGENTA)} {msg}")

    def progress(self, pct: int, check: str):
        if self.verbose >= 1:
            print(f"{self._fmt(f'{pct:3d}%', Fore.BLUE)} {check} done")

    def finding(self, sev: str, vuln: str, loc: str, param: str, payload: str, code: int):
        if self.verbose < 2:
            return
        sev_col = _SEV_COLORS.get(sev, Fore.WHITE)
        print(f"{self._fmt('FINDING', sev_col)} {vuln} "
              f"{loc}.{param} = {self.PAY}{payload}{Style.RESET_ALL} "
              f"{Style.DIM}(HTTP {code}){Style.RESET_ALL}")

    def report(self, aggregate):
        """Print one block per category of a finished scan."""
        print()
        for verdict in aggregate:
            category = verdict.category
            if not verdict.evaluated and verdict.error is None:
                status = f"{Style.DIM}NOT EVALUATED{Style.RESET_ALL}"
            elif verdict.insecure or verdict.findings:
                status = f"{Fore.RED}ISSUES FOUND{Style.RESET_ALL}"
            else:
                status = f"{Fore.GREEN}OK{Style.RESET_ALL}"
            sev = ""
            if verdict.severity:
                sev = f" {_SEV_COLORS.get(verdict.severity, Fore.WHITE)}" \
                      f"[{verdict.severity.upper()}]{Style.RESET_ALL}"
            print(f"{Style.BRIGHT}{category.label}{Style.RESET_ALL}{sev}: {status}")
            for line in verdict.findings:
                print(f"    - {line}")
        print()


_SEV_COLORS = {"critical": Fore.RED + Style.BRIGHT, "high": Fore.RED,
               "medium": Fore.YELLOW, "low": Fore.GREEN}
