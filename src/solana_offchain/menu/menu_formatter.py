"""
Menu formatting utilities for the crowdfunding CLI interface.
Provides consistent styling, colors, and layout for interactive menus.
"""


# ANSI color codes for menu styling
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


class MenuFormatter:
    """Menu formatting class with consistent styling"""

    def __init__(self, width: int = 80):
        self.width = width

    def print_header(self, title: str, subtitle: str = None):
        """Print a boxed header"""
        inner = self.width - 2
        print("\n" + Colors.HEADER + "╔" + "═" * inner + "╗" + Colors.ENDC)
        print(f"{Colors.HEADER}║{Colors.BOLD}{title:^{inner}}{Colors.ENDC}{Colors.HEADER}║{Colors.ENDC}")
        if subtitle:
            print(f"{Colors.HEADER}║{Colors.OKBLUE}{subtitle:^{inner}}{Colors.ENDC}{Colors.HEADER}║{Colors.ENDC}")
        print(Colors.HEADER + "╚" + "═" * inner + "╝" + Colors.ENDC)

    def print_status_bar(self, network: str, balance_sol: float, wallet_name: str = None):
        """Print a status information bar"""
        status_line = f"Network: {network}"
        if wallet_name:
            status_line += f" | Wallet: {wallet_name}"
        status_line += f" | Balance: {balance_sol:.6f} SOL"

        print(f"{Colors.OKBLUE}┌{Colors.ENDC}" + "─" * (self.width - 2) + f"{Colors.OKBLUE}┐{Colors.ENDC}")
        print(f"{Colors.OKBLUE}│{Colors.ENDC} {status_line:<{self.width - 4}} {Colors.OKBLUE}│{Colors.ENDC}")
        print(f"{Colors.OKBLUE}└{Colors.ENDC}" + "─" * (self.width - 2) + f"{Colors.OKBLUE}┘{Colors.ENDC}")

    def print_section(self, title: str):
        """Print a section separator"""
        print(
            f"\n{Colors.OKBLUE}┌─ {Colors.BOLD}{title}{Colors.ENDC} "
            f"{Colors.OKBLUE}{'─' * (self.width - len(title) - 4)}{Colors.ENDC}"
        )

    def print_menu_option(self, number: str, description: str):
        print(f"{Colors.OKBLUE}│{Colors.ENDC} {Colors.BOLD}{number:>2}{Colors.ENDC}. {description}")

    def print_footer(self):
        print(f"{Colors.OKBLUE}└{Colors.ENDC}" + "─" * (self.width - 2))

    def print_success(self, message: str):
        print(f"\n{Colors.OKGREEN}✓ {message}{Colors.ENDC}")

    def print_error(self, message: str):
        print(f"\n{Colors.FAIL}✗ Error: {message}{Colors.ENDC}")

    def print_info(self, message: str):
        print(f"\n{Colors.OKBLUE}ℹ {message}{Colors.ENDC}")

    def get_input(self, prompt: str) -> str:
        """Get user input with formatted prompt"""
        return input(f"{Colors.BOLD}> {prompt}: {Colors.ENDC}").strip()

    def confirm_action(self, message: str) -> bool:
        """Ask for user confirmation with formatted prompt"""
        response = input(f"{Colors.WARNING}? {message} (y/N): {Colors.ENDC}").strip().lower()
        return response in ["y", "yes"]

    def print_campaign(self, address: str, name: str, description: str, image_link: str, admin: str, donated_sol: float):
        """Print formatted campaign information"""
        print(f"{Colors.OKBLUE}│{Colors.ENDC} {Colors.BOLD}{name}{Colors.ENDC}")
        print(f"{Colors.OKBLUE}│{Colors.ENDC}   Address:     {address}")
        print(f"{Colors.OKBLUE}│{Colors.ENDC}   Admin:       {admin}")
        print(f"{Colors.OKBLUE}│{Colors.ENDC}   Description: {description}")
        print(f"{Colors.OKBLUE}│{Colors.ENDC}   Image:       {image_link}")
        print(f"{Colors.OKBLUE}│{Colors.ENDC}   Donated:     {donated_sol:.6f} SOL")
        print(f"{Colors.OKBLUE}│{Colors.ENDC}")
