import shutil
import subprocess
import sys

COMMAND_NOT_FOUND = 127


def find_tool(name):
    """Return the absolute path of an executable on PATH, or None"""
    return shutil.which(name)


def run_command(args, cwd):
    """Run a command in the foreground and return its exit code"""
    print("cmd=", " ".join(str(a) for a in args), "cwd=", cwd)
    try:
        result = subprocess.run([str(a) for a in args], cwd=cwd, check=False)
    except FileNotFoundError as e:
        print(f"❌ Could not start {args[0]}: {e}", file=sys.stderr)
        return COMMAND_NOT_FOUND
    return result.returncode
