def pull_valid_command():
    valid_commands = [
        "convert_keys_values",

        "debug",
        "delete_mirrors",

        "edit_config",

        "help",

        "remove_trusted_peer",

        "show_my_mirrors",
        "show_network",
        "split_largest_coin",
        "switch_network",

        "version",
    ]

    valid_short_cuts = [
        "-ec",
        "-rtp",
        "-sn","-sw",
        "-v","_v",
    ]

    return [valid_commands, valid_short_cuts]


def pull_short_cut_map():
    return {
        "-ec": "edit_config",
        "-rtp": "remove_trusted_peer",
        "-sn": "switch_network",
        "-sw": "show_network",
        "-v": "version",
        "_v": "version",
    }
