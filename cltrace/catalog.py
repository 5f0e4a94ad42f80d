import pyopencl as cl


class EnumerationError(Exception):
    def __init__(self, message):
        super().__init__(message)

class SelectionError(Exception):
    def __init__(self, message):
        super().__init__(message)


def name(obj):
    if isinstance(obj, cl.Platform):
        return obj.get_info(cl.platform_info.NAME).strip()
    return obj.get_info(cl.device_info.NAME).strip()

def compute_units(device):
    return device.get_info(cl.device_info.MAX_COMPUTE_UNITS)

def max_work_group_size(device):
    return device.get_info(cl.device_info.MAX_WORK_GROUP_SIZE)


def list_platforms():
    try:
        platforms = cl.get_platforms()
    except cl.Error as e:
        # ICD loader reports PLATFORM_NOT_FOUND_KHR when nothing is installed
        raise EnumerationError("No OpenCL platform found") from e
    if not platforms:
        raise EnumerationError("No OpenCL platform found")
    return platforms

def list_devices(platform):
    try:
        devices = platform.get_devices(device_type=cl.device_type.ALL)
    except cl.Error as e:
        raise EnumerationError(
            "No OpenCL device found on platform '{}'".format(name(platform))
        ) from e
    if not devices:
        raise EnumerationError(
            "No OpenCL device found on platform '{}'".format(name(platform))
        )
    return devices


def describe_platforms(platforms, write=print):
    write("Available OpenCL platforms:\n")
    for i, p in enumerate(platforms):
        write("\t{}: {}".format(i + 1, name(p)))

def describe_device(device, indent="\t\t"):
    return [
        "{}Max compute units: {}".format(indent, compute_units(device)),
        "{}Max work group size: {}".format(indent, max_work_group_size(device)),
    ]

def describe_devices(devices, write=print):
    write("Available OpenCL devices on this platform:\n")
    for i, d in enumerate(devices):
        write("\t{}: {}".format(i + 1, name(d)))
        for line in describe_device(d):
            write(line)
        write("")


def parse_choice(text, count):
    try:
        index = int(text.strip())
    except (ValueError, AttributeError):
        return None
    if index < 1 or index > count:
        return None
    return index - 1

def select(items, kind, read=input):
    """Pick one of `items`.

    A single candidate is taken as is, without reading any input. Otherwise
    the user is asked for a 1-based index until a valid one is given. Every
    answer is consumed as a whole line, so leftovers of a rejected answer
    never reach the next prompt.
    """
    if not items:
        raise SelectionError("Nothing to choose an OpenCL {} from".format(kind))
    if len(items) == 1:
        return items[0]

    prompt = "Choose an OpenCL {}: ".format(kind)
    message = "\n" + prompt
    while True:
        try:
            text = read(message)
        except EOFError as e:
            raise SelectionError(
                "Input closed while choosing an OpenCL {}".format(kind)
            ) from e
        index = parse_choice(text, len(items))
        if index is not None:
            return items[index]
        message = "No such option. " + prompt

def select_platform(platforms, read=input):
    return select(platforms, "platform", read=read)

def select_device(devices, read=input):
    return select(devices, "device", read=read)
