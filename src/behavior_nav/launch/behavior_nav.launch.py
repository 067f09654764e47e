#!/usr/bin/env python3
"""
Behavior Nav Launch - laser-only reactive navigation
Starts behavior_nav.py with the selected behavior and motion limits.
"""
from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node
from launch_ros.parameter_descriptions import ParameterValue


def generate_launch_description():
    use_sim_time = LaunchConfiguration('use_sim_time')
    behavior = LaunchConfiguration('behavior')
    security_distance = LaunchConfiguration('security_distance')
    wall_follow_distance = LaunchConfiguration('wall_follow_distance')
    linear_velocity = LaunchConfiguration('linear_velocity')
    angular_velocity = LaunchConfiguration('angular_velocity')

    declare_args = [
        DeclareLaunchArgument('use_sim_time', default_value='false'),
        DeclareLaunchArgument(
            'behavior',
            default_value='wall_follow',
            description='wall_follow | controlled_random | total_random',
        ),
        DeclareLaunchArgument('security_distance', default_value='0.5'),
        DeclareLaunchArgument('wall_follow_distance', default_value='0.8'),
        DeclareLaunchArgument('linear_velocity', default_value='0.3'),
        DeclareLaunchArgument('angular_velocity', default_value='0.6'),
        DeclareLaunchArgument('scan_topic', default_value='/scan'),
        DeclareLaunchArgument('cmd_vel_topic', default_value='/cmd_vel'),
    ]

    behavior_nav = Node(
        package='behavior_nav',
        executable='behavior_nav.py',
        name='behavior_nav',
        parameters=[{
            'use_sim_time': ParameterValue(use_sim_time, value_type=bool),
            'behavior': behavior,
            'security_distance': ParameterValue(security_distance, value_type=float),
            'wall_follow_distance': ParameterValue(wall_follow_distance, value_type=float),
            'linear_velocity': ParameterValue(linear_velocity, value_type=float),
            'angular_velocity': ParameterValue(angular_velocity, value_type=float),
            'scan_topic': LaunchConfiguration('scan_topic'),
            'cmd_vel_topic': LaunchConfiguration('cmd_vel_topic'),
        }],
        output='screen',
    )

    return LaunchDescription(declare_args + [behavior_nav])
