import time
import os
import psutil


class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"
    UNDERLINE = "\033[4m"


def get_proc_mem_mb():
    """
    Returns (rss_mb, uss_mb_or_None) for the current Python process.
    - RSS: resident set size (what the OS keeps in RAM for this process)
    - USS: unique set size (memory private to this process) if available
    """
    p = psutil.Process(os.getpid())
    try:
        m = p.memory_full_info()  # may include 'uss' on many platforms
        rss_mb = m.rss / (1024**2)
        uss = getattr(m, "uss", None)
        uss_mb = (uss / (1024**2)) if uss is not None else None
    except psutil.AccessDenied:
        m = p.memory_info()
        rss_mb = m.rss / (1024**2)
        uss_mb = None
    return rss_mb, uss_mb


def get_disk_usage(path=None):
    """Disk usage percent of the partition holding `path` (default: the working directory)."""
    return psutil.disk_usage(path or os.getcwd()).percent


def print_resource_usage(step_name, last_time):
    """
    Print one [DEBUG] line with step duration, process memory, CPU and disk.

    Returns the current timestamp so callers can chain the next measurement.
    """
    now = time.time()
    step_duration = now - last_time

    rss_mb, _ = get_proc_mem_mb()
    cpu_p = psutil.cpu_percent()
    disk_usage = get_disk_usage()

    print(
        f"{Colors.OKCYAN}[DEBUG]{Colors.ENDC} Step: {step_name:>25} || Duration: {step_duration:>8.2f}s || "
        f"RSS: {rss_mb:>8.2f}MB || CPU: {cpu_p:>6.2f}% || Disk: {disk_usage}%"
    )
    return now
